"""
Climate Services

Queries behind the climate endpoints. Results are plain JSON-ready dicts so
they can be cached as-is.
"""

from datetime import timedelta

from sqlalchemy import func

from climatrix.errors import NotFound
from climatrix.models import ClimateReading
from climatrix.utils import utcnow


def _city_filter(city):
    return func.lower(ClimateReading.city) == city.lower()


def get_latest_reading(city):
    """Newest reading for ``city`` (case-insensitive)."""
    reading = ClimateReading.query.filter(_city_filter(city))\
        .order_by(ClimateReading.reading_time.desc()).first()

    if not reading:
        raise NotFound(f'No climate data found for {city}')

    return reading.to_dict()


def get_reading_history(city, hours):
    """Readings for ``city`` from the last ``hours`` hours, oldest first."""
    start_time = utcnow() - timedelta(hours=hours)

    readings = ClimateReading.query\
        .filter(_city_filter(city), ClimateReading.reading_time >= start_time)\
        .order_by(ClimateReading.reading_time.asc()).all()

    if not readings:
        raise NotFound(f'No historical data found for {city}')

    return {
        'city': city,
        'hours': hours,
        'count': len(readings),
        'readings': [r.to_history_dict() for r in readings],
    }
