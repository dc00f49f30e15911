"""
Weather Service

Thin proxy to the OpenWeatherMap API: current conditions, forecast and air
pollution, plus a daily temperature trend built from the forecast.
"""

import logging
from datetime import datetime, timezone

import requests
from flask import current_app

from climatrix.errors import InternalError, NotFound

logger = logging.getLogger(__name__)

TREND_DAYS = 7


def _fetch(path, params, not_found_message=None, failure_message='Failed to fetch weather data'):
    """GET ``WEATHER_API_URL/path`` and return the decoded JSON body."""
    api_key = current_app.config.get('WEATHER_API_KEY')
    if not api_key:
        raise InternalError('Weather API key not configured')

    url = f"{current_app.config['WEATHER_API_URL'].rstrip('/')}/{path}"
    query = dict(params, appid=api_key)

    try:
        resp = requests.get(url, params=query, timeout=current_app.config['WEATHER_TIMEOUT'])
    except requests.exceptions.Timeout:
        logger.warning('Weather API timed out for %s', path)
        raise InternalError(failure_message)
    except requests.exceptions.RequestException as e:
        logger.warning('Weather API error for %s: %s', path, e)
        raise InternalError(failure_message)

    if resp.status_code == 404 and not_found_message:
        raise NotFound(not_found_message)
    if resp.status_code != 200:
        logger.warning('Weather API returned %s for %s', resp.status_code, path)
        raise InternalError(failure_message)

    try:
        return resp.json()
    except ValueError:
        logger.warning('Weather API returned a non-JSON body for %s', path)
        raise InternalError(failure_message)


def get_weather_by_city(city):
    """Current conditions for a city name, metric units."""
    return _fetch('weather', {'q': city, 'units': 'metric'}, not_found_message='City not found')


def get_weather_by_coords(lat, lon):
    return _fetch('weather', {'lat': lat, 'lon': lon, 'units': 'metric'})


def get_forecast_by_city(city):
    """5-day / 3-hour forecast for a city name."""
    return _fetch('forecast', {'q': city, 'units': 'metric'}, not_found_message='City not found',
                  failure_message='Failed to fetch forecast data')


def get_air_quality(lat, lon):
    return _fetch('air_pollution', {'lat': lat, 'lon': lon},
                  failure_message='Failed to fetch air quality data')


def build_trend(forecast, city):
    """Reduce forecast entries to per-day average, max and min temperature.

    Entries are grouped by UTC date, days are sorted, and at most
    ``TREND_DAYS`` are returned.
    """
    daily = {}
    for entry in forecast.get('list') or []:
        try:
            day = datetime.fromtimestamp(entry['dt'], tz=timezone.utc).date().isoformat()
            temp = float(entry['main']['temp'])
        except (KeyError, TypeError, ValueError):
            continue
        daily.setdefault(day, []).append(temp)

    trend = [
        {
            'date': day,
            'avgTemp': round(sum(temps) / len(temps), 1),
            'maxTemp': round(max(temps), 1),
            'minTemp': round(min(temps), 1),
        }
        for day, temps in sorted(daily.items())
    ][:TREND_DAYS]

    city_info = forecast.get('city') or {}
    return {
        'city': city_info.get('name') or city,
        'country': city_info.get('country'),
        'trend': trend,
    }
