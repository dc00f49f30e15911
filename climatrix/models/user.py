"""
User and Profile Models
"""

from climatrix.constants import ROLES
from climatrix.extensions import db
from climatrix.utils import isoformat, utcnow


class User(db.Model):
    """Account holder"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    username = db.Column(db.String(30), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    avatar = db.Column(db.String(255))
    role = db.Column(db.Enum(*ROLES, name='user_role'), default='USER', nullable=False)
    is_verified = db.Column(db.Boolean, default=False, nullable=False)

    city = db.Column(db.String(100))
    state = db.Column(db.String(100))
    country = db.Column(db.String(100))
    latitude = db.Column(db.Float)
    longitude = db.Column(db.Float)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    profile = db.relationship('Profile', backref='user', uselist=False,
                              cascade='all, delete-orphan')

    def summary(self):
        """Author/creator shape embedded in other resources."""
        return {'id': self.id, 'username': self.username, 'avatar': self.avatar}

    def to_dict(self, include_profile=True):
        data = {
            'id': self.id,
            'email': self.email,
            'username': self.username,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'avatar': self.avatar,
            'role': self.role,
            'city': self.city,
            'state': self.state,
            'country': self.country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'createdAt': isoformat(self.created_at),
        }
        if include_profile:
            data['profile'] = self.profile.to_dict() if self.profile else None
        return data

    def __repr__(self):
        return f'<User {self.username}>'


class Profile(db.Model):
    """Optional public details for a user"""
    __tablename__ = 'profiles'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    bio = db.Column(db.String(500))
    website = db.Column(db.String(255))
    twitter = db.Column(db.String(100))
    linkedin = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    organization = db.Column(db.String(200))
    interests = db.Column(db.JSON, default=list)

    def to_dict(self):
        return {
            'bio': self.bio,
            'website': self.website,
            'twitter': self.twitter,
            'linkedin': self.linkedin,
            'phone': self.phone,
            'organization': self.organization,
            'interests': self.interests or [],
        }

    def __repr__(self):
        return f'<Profile user:{self.user_id}>'
