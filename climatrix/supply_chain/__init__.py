"""
Supply Chain Blueprint

Shipment tracking with an append-only event timeline.
"""

from flask import Blueprint

supply_chain_bp = Blueprint('supply_chain', __name__)

from climatrix.supply_chain import routes  # noqa: E402, F401
