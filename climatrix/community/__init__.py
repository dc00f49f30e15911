"""
Community Blueprint

Groups, posts and comments.
"""

from flask import Blueprint

community_bp = Blueprint('community', __name__)

from climatrix.community import routes  # noqa: E402, F401
