"""
Weather Routes

Proxy endpoints for the OpenWeatherMap API.
"""

from climatrix.extensions import cache
from climatrix.responses import success_response, validate_query
from climatrix.schemas import CityQuery, CoordinatesQuery
from climatrix.services import weather as weather_service
from climatrix.weather import weather_bp


@weather_bp.route('/city')
def by_city():
    """Current weather for a city, e.g. /api/weather/city?city=Mumbai"""
    city = validate_query(CityQuery).city

    data, hit = cache.remember(
        f'weather:city:{city.lower()}', 'short',
        lambda: weather_service.get_weather_by_city(city),
    )
    return success_response(data, cache_hit=hit)


@weather_bp.route('/coords')
def by_coords():
    query = validate_query(CoordinatesQuery)
    return success_response(weather_service.get_weather_by_coords(query.lat, query.lon))


@weather_bp.route('/forecast')
def forecast():
    city = validate_query(CityQuery).city
    return success_response(weather_service.get_forecast_by_city(city))


@weather_bp.route('/trend')
def trend():
    """Daily temperature trend derived from the 5-day forecast"""
    city = validate_query(CityQuery).city

    data, hit = cache.remember(
        f'weather:trend:{city.lower()}', 'medium',
        lambda: weather_service.build_trend(weather_service.get_forecast_by_city(city), city),
    )
    return success_response(data, cache_hit=hit)


@weather_bp.route('/air-quality')
def air_quality():
    query = validate_query(CoordinatesQuery)
    return success_response(weather_service.get_air_quality(query.lat, query.lon))
