"""
Climate Blueprint

Latest and historical climate readings, plus reading ingestion.
"""

from flask import Blueprint

climate_bp = Blueprint('climate', __name__)

from climatrix.climate import routes  # noqa: E402, F401
