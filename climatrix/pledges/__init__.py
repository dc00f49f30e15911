"""
Pledges Blueprint

Users' environmental pledges and their verification.
"""

from flask import Blueprint

pledges_bp = Blueprint('pledges', __name__)

from climatrix.pledges import routes  # noqa: E402, F401
