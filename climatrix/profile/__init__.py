"""
Profile Blueprint

The current user's account and profile details.
"""

from flask import Blueprint

profile_bp = Blueprint('profile', __name__)

from climatrix.profile import routes  # noqa: E402, F401
