"""
Weather Blueprint

Proxy endpoints for the third-party weather API.
"""

from flask import Blueprint

weather_bp = Blueprint('weather', __name__)

from climatrix.weather import routes  # noqa: E402, F401
