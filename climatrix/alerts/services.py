"""
Alert Services
"""

from sqlalchemy import case, func, select

from climatrix.constants import SEVERITIES
from climatrix.extensions import cache, db
from climatrix.models import EnvironmentalAlert
from climatrix.responses import paginate
from climatrix.utils import utcnow

# LOW ranks 0, EXTREME ranks highest
severity_rank = case(
    {severity: rank for rank, severity in enumerate(SEVERITIES)},
    value=EnvironmentalAlert.severity,
)


def list_active_alerts(query):
    """One page of active alerts, most severe first, then newest."""
    stmt = select(EnvironmentalAlert).where(EnvironmentalAlert.is_active.is_(True))
    if query.city:
        stmt = stmt.where(func.lower(EnvironmentalAlert.city) == query.city.lower())
    if query.severity:
        stmt = stmt.where(EnvironmentalAlert.severity == query.severity)
    stmt = stmt.order_by(severity_rank.desc(), EnvironmentalAlert.start_time.desc())

    alerts, meta = paginate(stmt, query.page, query.limit)
    return {'alerts': [a.to_dict() for a in alerts], 'meta': meta}


def expire_alerts(now=None):
    """Deactivate active alerts whose end time has passed. Returns the count."""
    now = now or utcnow()
    expired = EnvironmentalAlert.query.filter(
        EnvironmentalAlert.is_active.is_(True),
        EnvironmentalAlert.end_time.isnot(None),
        EnvironmentalAlert.end_time <= now,
    ).all()

    for alert in expired:
        alert.is_active = False
    db.session.commit()

    if expired:
        cache.invalidate('alerts')
    return len(expired)
