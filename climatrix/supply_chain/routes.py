"""
Supply Chain Routes

Shipment tracking. Every change to an item is recorded as an event; events are
only ever appended.
"""

import logging

from climatrix.auth.decorators import current_user_id, login_required
from climatrix.errors import Conflict, NotFound
from climatrix.extensions import db
from climatrix.models import SupplyChainAlert, SupplyChainEvent, SupplyChainItem
from climatrix.responses import success_response, validate_body
from climatrix.schemas import (
    CreateSupplyChainEventRequest, CreateSupplyChainItemRequest, UpdateSupplyChainItemRequest,
)
from climatrix.supply_chain import supply_chain_bp
from climatrix.utils import generate_product_code, utcnow

logger = logging.getLogger(__name__)

ARRIVED_STATUSES = ('ARRIVED', 'DELIVERED')


def _own_item(item_id):
    item = db.session.get(SupplyChainItem, item_id)
    if not item or item.user_id != current_user_id():
        raise NotFound('Supply chain item not found')
    return item


@supply_chain_bp.route('')
@login_required
def list_items():
    """The caller's items, newest first, with recent events and open alerts"""
    items = SupplyChainItem.query.filter_by(user_id=current_user_id())\
        .order_by(SupplyChainItem.created_at.desc(), SupplyChainItem.id.desc()).all()
    return success_response({'items': [item.to_dict() for item in items]})


@supply_chain_bp.route('', methods=['POST'])
@login_required
def create_item():
    data = validate_body(CreateSupplyChainItemRequest)
    fields = data.field_values()
    fields['product_code'] = data.product_code or generate_product_code()

    if SupplyChainItem.query.filter_by(product_code=fields['product_code']).first():
        raise Conflict('A product with this code already exists')

    item = SupplyChainItem(user_id=current_user_id(), status='PENDING', **fields)
    item.events.append(SupplyChainEvent(
        event_type='created',
        location=item.origin,
        description=f'{item.product_name} registered for shipment',
        timestamp=utcnow(),
    ))
    db.session.add(item)
    db.session.commit()

    logger.info('Supply chain item %s created', item.product_code)
    return success_response(item.to_dict(), 'Item created successfully', status=201)


@supply_chain_bp.route('/<int:item_id>', methods=['PATCH'])
@login_required
def update_item(item_id):
    """Move or re-status an item, recording each change as an event"""
    data = validate_body(UpdateSupplyChainItemRequest)
    item = _own_item(item_id)
    now = utcnow()

    if data.temperature is not None:
        item.temperature = data.temperature
    if data.humidity is not None:
        item.humidity = data.humidity
    if data.actual_arrival is not None:
        item.actual_arrival = data.actual_arrival

    if data.current_location and data.current_location != item.current_location:
        item.current_location = data.current_location
        item.events.append(SupplyChainEvent(
            event_type='location_update',
            location=data.current_location,
            description=f'Arrived at {data.current_location}',
            timestamp=now,
        ))

    if data.status and data.status != item.status:
        previous = item.status
        item.status = data.status
        item.events.append(SupplyChainEvent(
            event_type='status_change',
            location=item.current_location,
            description=f'Status changed from {previous} to {data.status}',
            timestamp=now,
        ))

        if data.status == 'DELAYED':
            item.alerts.append(SupplyChainAlert(
                alert_type='DELAYED',
                message=f'{item.product_name} is delayed at {item.current_location}',
            ))
        elif data.status in ARRIVED_STATUSES:
            if item.actual_arrival is None:
                item.actual_arrival = now
            for alert in item.alerts:
                alert.is_resolved = True

    db.session.commit()
    return success_response(item.to_dict(), 'Item updated successfully')


@supply_chain_bp.route('/<int:item_id>/events', methods=['POST'])
@login_required
def add_event(item_id):
    data = validate_body(CreateSupplyChainEventRequest)
    item = _own_item(item_id)

    fields = data.field_values()
    fields.setdefault('timestamp', utcnow())
    event = SupplyChainEvent(item_id=item.id, **fields)
    db.session.add(event)
    db.session.commit()

    return success_response(event.to_dict(), 'Event recorded', status=201)
