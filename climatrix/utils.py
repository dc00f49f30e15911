"""
Small helpers shared across blueprints.
"""

import re
import secrets
import string
import time
from datetime import datetime, timezone


def utcnow():
    """Naive UTC timestamp, matching how the database columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value is not None else None


def slugify(name):
    """Lowercase, collapse runs of non-alphanumerics into '-', trim dashes."""
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


def generate_product_code():
    suffix = ''.join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(9))
    return f'PROD-{int(time.time() * 1000)}-{suffix}'
