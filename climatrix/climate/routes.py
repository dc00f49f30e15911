"""
Climate Routes
"""

import logging

from climatrix.auth.decorators import roles_required
from climatrix.climate import climate_bp
from climatrix.climate.services import get_latest_reading, get_reading_history
from climatrix.errors import ValidationFailed
from climatrix.extensions import cache, db
from climatrix.models import ClimateReading
from climatrix.responses import success_response, validate_body, validate_query
from climatrix.schemas import ClimateQuery, CreateClimateReadingRequest, LatestClimateQuery
from climatrix.services.aqi import calculate_aqi

logger = logging.getLogger(__name__)


@climate_bp.route('/latest')
def latest():
    """Latest reading for a city, e.g. /api/climate/latest?city=New Delhi"""
    city = validate_query(LatestClimateQuery).city

    data, hit = cache.remember(
        f'climate:latest:{city.lower()}', 'short',
        lambda: get_latest_reading(city),
    )
    return success_response(data, cache_hit=hit)


@climate_bp.route('/history')
def history():
    """Readings for the last N hours (default 24, max 168)"""
    query = validate_query(ClimateQuery)

    data, hit = cache.remember(
        f'climate:history:{query.city.lower()}:{query.hours}', 'medium',
        lambda: get_reading_history(query.city, query.hours),
    )
    return success_response(data, cache_hit=hit)


@climate_bp.route('/readings', methods=['POST'])
@roles_required('ADMIN', 'ANALYST')
def create_reading():
    """Ingest one reading; AQI is derived from PM2.5 when not supplied"""
    data = validate_body(CreateClimateReadingRequest)
    fields = data.field_values()

    if data.aqi is None:
        if data.pm25 is None:
            raise ValidationFailed.for_field('aqi', 'Either aqi or pm25 is required')
        fields['aqi'] = calculate_aqi(data.pm25)

    reading = ClimateReading(**fields)
    db.session.add(reading)
    db.session.commit()

    cache.invalidate('climate')
    logger.info('Stored climate reading %s for %s', reading.id, reading.city or reading.location)

    return success_response(reading.to_dict(), 'Climate reading recorded', status=201)
