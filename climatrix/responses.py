"""
Response helpers

Success envelope, request parsing against pydantic schemas, and pagination.
"""

from flask import jsonify, request

from climatrix.extensions import db


def success_response(data=None, message=None, meta=None, status=200, cache_hit=None):
    """Build the ``{success: true, ...}`` envelope.

    ``cache_hit`` adds an ``X-Cache`` header for cache-aside reads so the
    body stays identical whether or not it came from the cache.
    """
    body = {'success': True, 'data': data}
    if message is not None:
        body['message'] = message
    if meta is not None:
        body['meta'] = meta
    response = jsonify(body)
    response.status_code = status
    if cache_hit is not None:
        response.headers['X-Cache'] = 'HIT' if cache_hit else 'MISS'
    return response


def validate_query(schema):
    """Parse the query string with ``schema``; raises ``pydantic.ValidationError``."""
    return schema.model_validate(request.args.to_dict())


def validate_body(schema):
    """Parse the JSON body with ``schema``; a missing or non-object body counts as ``{}``."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    return schema.model_validate(payload)


def page_meta(total, page, limit):
    return {
        'total': total,
        'page': page,
        'limit': limit,
        'totalPages': -(-total // limit),
    }


def paginate(select, page, limit):
    """Run ``select`` one page at a time; returns ``(items, meta)``."""
    pagination = db.paginate(select, page=page, per_page=limit, max_per_page=limit,
                             error_out=False, count=True)
    return pagination.items, page_meta(pagination.total or 0, page, limit)
