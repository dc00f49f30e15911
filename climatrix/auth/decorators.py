"""
Auth Decorators

Guards run before the view body, so a rejected caller never reaches any
database write.
"""

from functools import wraps

from flask import g

from climatrix.services.auth import require_auth, require_role


def login_required(f):
    """Require a valid token; the identity is available as ``g.current_user``."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        g.current_user = require_auth()
        return f(*args, **kwargs)
    return wrapper


def roles_required(*roles):
    """Require a valid token whose role is one of ``roles``."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            g.current_user = require_role(roles)
            return f(*args, **kwargs)
        return wrapper
    return decorator


def current_user_id():
    return g.current_user['userId']
