"""
Auth Blueprint

Signup, login and logout for cookie-carried JWT sessions.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from climatrix.auth import routes  # noqa: E402, F401
