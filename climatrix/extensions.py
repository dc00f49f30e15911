"""
Flask Extensions

The database and cache handles are created here unbound and attached to an
application inside ``create_app``.
"""

from flask_sqlalchemy import SQLAlchemy

from climatrix.services.cache import CacheService

# Database instance
db = SQLAlchemy()

# Redis-backed cache-aside helper
cache = CacheService()
