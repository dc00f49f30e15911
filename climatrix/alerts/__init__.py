"""
Alerts Blueprint

Active environmental alerts.
"""

from flask import Blueprint

alerts_bp = Blueprint('alerts', __name__)

from climatrix.alerts import routes  # noqa: E402, F401
