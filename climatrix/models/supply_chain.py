"""
Supply Chain Models

Tracked shipments, their append-only event timeline and open issues.
"""

from climatrix.constants import SUPPLY_CHAIN_STATUSES
from climatrix.extensions import db
from climatrix.utils import isoformat, utcnow


class SupplyChainItem(db.Model):
    """A tracked shipment"""
    __tablename__ = 'supply_chain_items'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    product_name = db.Column(db.String(200), nullable=False)
    product_code = db.Column(db.String(64), unique=True, nullable=False)
    category = db.Column(db.String(100), nullable=False)
    origin = db.Column(db.String(200), nullable=False)
    current_location = db.Column(db.String(200), nullable=False)
    destination = db.Column(db.String(200), nullable=False)

    # Environmental impact
    carbon_footprint = db.Column(db.Float)  # kg CO2e
    energy_used = db.Column(db.Float)  # kWh
    water_used = db.Column(db.Float)  # litres
    waste_generated = db.Column(db.Float)  # kg

    status = db.Column(db.Enum(*SUPPLY_CHAIN_STATUSES, name='supply_chain_status'),
                       default='PENDING', nullable=False)
    temperature = db.Column(db.Float)
    humidity = db.Column(db.Float)
    estimated_arrival = db.Column(db.DateTime)
    actual_arrival = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    events = db.relationship('SupplyChainEvent', backref='item', lazy=True,
                             order_by='SupplyChainEvent.timestamp.desc()',
                             cascade='all, delete-orphan')
    alerts = db.relationship('SupplyChainAlert', backref='item', lazy=True,
                             cascade='all, delete-orphan')

    def to_dict(self, recent_events=5):
        open_alerts = [a for a in self.alerts if not a.is_resolved]
        return {
            'id': self.id,
            'productName': self.product_name,
            'productCode': self.product_code,
            'category': self.category,
            'origin': self.origin,
            'currentLocation': self.current_location,
            'destination': self.destination,
            'carbonFootprint': self.carbon_footprint,
            'energyUsed': self.energy_used,
            'waterUsed': self.water_used,
            'wasteGenerated': self.waste_generated,
            'status': self.status,
            'temperature': self.temperature,
            'humidity': self.humidity,
            'estimatedArrival': isoformat(self.estimated_arrival),
            'actualArrival': isoformat(self.actual_arrival),
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
            'events': [e.to_dict() for e in self.events[:recent_events]],
            'alerts': [a.to_dict() for a in open_alerts],
            'eventCount': len(self.events),
            'alertCount': len(self.alerts),
        }

    def __repr__(self):
        return f'<SupplyChainItem {self.product_code} {self.status}>'


class SupplyChainEvent(db.Model):
    """One entry in a shipment's timeline; never edited"""
    __tablename__ = 'supply_chain_events'

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey('supply_chain_items.id'), nullable=False, index=True)
    event_type = db.Column(db.String(50), nullable=False)
    location = db.Column(db.String(200), nullable=False)
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)
    description = db.Column(db.String(500))
    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'itemId': self.item_id,
            'eventType': self.event_type,
            'location': self.location,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'description': self.description,
            'timestamp': isoformat(self.timestamp),
        }

    def __repr__(self):
        return f'<SupplyChainEvent {self.event_type} item:{self.item_id}>'


class SupplyChainAlert(db.Model):
    """Open issue raised against a shipment"""
    __tablename__ = 'supply_chain_alerts'

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey('supply_chain_items.id'), nullable=False, index=True)
    alert_type = db.Column(db.String(50), nullable=False)
    message = db.Column(db.String(500), nullable=False)
    is_resolved = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'itemId': self.item_id,
            'alertType': self.alert_type,
            'message': self.message,
            'isResolved': self.is_resolved,
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<SupplyChainAlert {self.alert_type} item:{self.item_id}>'
