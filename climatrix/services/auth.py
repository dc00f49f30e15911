"""
Auth Service

Stateless identity: a signed, expiring JWT issued at login and carried in an
HTTP-only cookie. Verification fails closed.
"""

import logging
import re
import time

from flask import current_app, g, request
from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from climatrix.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

DURATION_UNITS = {
    's': 1,
    'm': 60,
    'h': 3600,
    'd': 86400,
    'w': 604800,
}
DURATION = re.compile(r'^(\d+)([a-zA-Z]?)$')


def expiration_seconds(value):
    """Convert a duration like ``'7d'``, ``'12h'`` or ``'3600'`` to seconds.

    A bare number is seconds; an unrecognised unit letter is read as days.
    Anything else raises ``ValueError``.
    """
    match = DURATION.match(str(value).strip())
    if not match:
        raise ValueError(f'Invalid duration: {value!r}')
    amount, unit = int(match.group(1)), match.group(2).lower()
    if not unit:
        return amount
    return amount * DURATION_UNITS.get(unit, DURATION_UNITS['d'])


def token_lifetime():
    return expiration_seconds(current_app.config['JWT_EXPIRES_IN'])


def hash_password(password):
    return generate_password_hash(password, method='pbkdf2:sha256')


def verify_password(password, password_hash):
    return check_password_hash(password_hash, password)


def create_token(user, now=None):
    """Issue a token for ``user`` carrying its id, email and role."""
    issued_at = int(now if now is not None else time.time())
    claims = {
        'sub': str(user.id),
        'userId': user.id,
        'email': user.email,
        'role': user.role,
        'iat': issued_at,
        'exp': issued_at + token_lifetime(),
    }
    return jwt.encode(claims, current_app.config['JWT_SECRET'],
                      algorithm=current_app.config['JWT_ALGORITHM'])


def verify_token(token):
    """Return the token's claims, or None if it is invalid or expired."""
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET'],
                          algorithms=[current_app.config['JWT_ALGORITHM']])
    except JWTError as e:
        logger.debug('Token verification failed: %s', e)
        return None


def get_auth_token():
    token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
    if token:
        return token
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None


def current_identity():
    """Decoded identity for this request, or None. Memoised on ``g``."""
    if 'identity' not in g:
        token = get_auth_token()
        g.identity = verify_token(token) if token else None
    return g.identity


def require_auth():
    identity = current_identity()
    if not identity:
        raise Unauthorized()
    return identity


def require_role(roles):
    identity = require_auth()
    if identity.get('role') not in roles:
        raise Forbidden('Forbidden: Insufficient permissions')
    return identity


def set_auth_cookie(response, token):
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'],
        token,
        max_age=token_lifetime(),
        httponly=True,
        secure=current_app.config['AUTH_COOKIE_SECURE'],
        samesite='Lax',
        path='/',
    )
    return response


def clear_auth_cookie(response):
    response.delete_cookie(current_app.config['AUTH_COOKIE_NAME'], path='/')
    return response
