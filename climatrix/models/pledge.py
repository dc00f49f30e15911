"""
Environmental Pledge Model
"""

from climatrix.constants import PLEDGE_STATUSES, PLEDGE_TYPES
from climatrix.extensions import db
from climatrix.utils import isoformat, utcnow


class EnvironmentalPledge(db.Model):
    """A user's committed environmental action"""
    __tablename__ = 'environmental_pledges'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    pledge_type = db.Column(db.Enum(*PLEDGE_TYPES, name='pledge_type'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit = db.Column(db.String(50), nullable=False)
    description = db.Column(db.String(500))
    status = db.Column(db.Enum(*PLEDGE_STATUSES, name='pledge_status'), default='ACTIVE', nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime)
    verified_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    user = db.relationship('User', backref='environmental_pledges')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'pledgeType': self.pledge_type,
            'quantity': self.quantity,
            'unit': self.unit,
            'description': self.description,
            'status': self.status,
            'startDate': isoformat(self.start_date),
            'endDate': isoformat(self.end_date),
            'verifiedAt': isoformat(self.verified_at),
            'createdAt': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<EnvironmentalPledge {self.pledge_type} {self.status}>'
