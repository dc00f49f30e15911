"""
Pledge Routes

Per-user data; nothing here is cached.
"""

import logging

from sqlalchemy import select

from climatrix.auth.decorators import current_user_id, login_required, roles_required
from climatrix.errors import NotFound, ValidationFailed
from climatrix.extensions import db
from climatrix.models import EnvironmentalPledge
from climatrix.pledges import pledges_bp
from climatrix.responses import paginate, success_response, validate_body, validate_query
from climatrix.schemas import CreatePledgeRequest, PledgeQuery, UpdatePledgeStatusRequest
from climatrix.utils import utcnow

logger = logging.getLogger(__name__)


def _own_pledge(pledge_id):
    pledge = db.session.get(EnvironmentalPledge, pledge_id)
    if not pledge or pledge.user_id != current_user_id():
        raise NotFound('Pledge not found')
    return pledge


@pledges_bp.route('')
@login_required
def list_pledges():
    """The caller's pledges, newest first"""
    query = validate_query(PledgeQuery)

    stmt = select(EnvironmentalPledge).where(EnvironmentalPledge.user_id == current_user_id())
    if query.status:
        stmt = stmt.where(EnvironmentalPledge.status == query.status)
    stmt = stmt.order_by(EnvironmentalPledge.created_at.desc(), EnvironmentalPledge.id.desc())

    pledges, meta = paginate(stmt, query.page, query.limit)
    return success_response({'pledges': [p.to_dict() for p in pledges], 'meta': meta})


@pledges_bp.route('', methods=['POST'])
@login_required
def create_pledge():
    data = validate_body(CreatePledgeRequest)

    pledge = EnvironmentalPledge(user_id=current_user_id(), status='ACTIVE', **data.field_values())
    db.session.add(pledge)
    db.session.commit()

    return success_response(pledge.to_dict(), 'Pledge created successfully', status=201)


@pledges_bp.route('/<int:pledge_id>', methods=['PATCH'])
@login_required
def update_pledge(pledge_id):
    """Close an active pledge as COMPLETED or CANCELLED"""
    data = validate_body(UpdatePledgeStatusRequest)
    pledge = _own_pledge(pledge_id)

    if pledge.status != 'ACTIVE':
        raise ValidationFailed.for_field(
            'status', f'Cannot change a {pledge.status} pledge to {data.status}')

    pledge.status = data.status
    if data.status == 'COMPLETED' and pledge.end_date is None:
        pledge.end_date = utcnow()
    db.session.commit()

    return success_response(pledge.to_dict(), 'Pledge updated successfully')


@pledges_bp.route('/<int:pledge_id>/verify', methods=['POST'])
@roles_required('ADMIN', 'ANALYST')
def verify_pledge(pledge_id):
    pledge = db.get_or_404(EnvironmentalPledge, pledge_id, description='Pledge not found')

    if pledge.status != 'COMPLETED':
        raise ValidationFailed.for_field('status', 'Only completed pledges can be verified')

    pledge.status = 'VERIFIED'
    pledge.verified_at = utcnow()
    db.session.commit()

    logger.info('Pledge %s verified by user %s', pledge.id, current_user_id())
    return success_response(pledge.to_dict(), 'Pledge verified')
