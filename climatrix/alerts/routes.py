"""
Alerts Routes
"""

import logging

from climatrix.alerts import alerts_bp
from climatrix.alerts.services import list_active_alerts
from climatrix.auth.decorators import roles_required
from climatrix.extensions import cache, db
from climatrix.models import EnvironmentalAlert
from climatrix.responses import success_response, validate_body, validate_query
from climatrix.schemas import AlertQuery, UpdateAlertRequest
from climatrix.utils import utcnow

logger = logging.getLogger(__name__)


@alerts_bp.route('/active')
def active():
    """Active alerts, most severe first, e.g. /api/alerts/active?city=Delhi&severity=HIGH"""
    query = validate_query(AlertQuery)
    cache_key = f"alerts:active:{(query.city or 'all').lower()}:{query.severity or 'all'}:{query.page}:{query.limit}"

    data, hit = cache.remember(cache_key, 'short', lambda: list_active_alerts(query))
    return success_response(data, cache_hit=hit)


@alerts_bp.route('/<int:alert_id>', methods=['PATCH'])
@roles_required('ADMIN')
def update_alert(alert_id):
    """Activate or deactivate an alert"""
    data = validate_body(UpdateAlertRequest)
    alert = db.get_or_404(EnvironmentalAlert, alert_id, description='Alert not found')

    alert.is_active = data.is_active
    alert.end_time = None if data.is_active else utcnow()
    db.session.commit()

    cache.invalidate('alerts')
    logger.info('Alert %s set active=%s', alert.id, alert.is_active)
    return success_response(alert.to_dict(), 'Alert updated successfully')
