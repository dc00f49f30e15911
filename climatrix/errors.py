"""
API Errors

Domain conditions are raised as exceptions anywhere in a request and turned
into the JSON error envelope here, in one place.
"""

import logging

from flask import jsonify
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound
from werkzeug.exceptions import HTTPException

from climatrix.extensions import db

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map directly to an HTTP status."""
    status_code = 500
    title = 'Internal Server Error'

    def __init__(self, message=None, errors=None, status_code=None):
        super().__init__(message or self.title)
        self.message = message or self.title
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(APIError):
    status_code = 400
    title = 'Validation Error'

    @classmethod
    def for_field(cls, field, message):
        return cls('Invalid request', errors=[{'field': field, 'message': message}])


class Unauthorized(APIError):
    status_code = 401
    title = 'Unauthorized'

    def __init__(self, message='You must be logged in to access this resource', errors=None):
        super().__init__(message, errors)


class Forbidden(APIError):
    status_code = 403
    title = 'Forbidden'


class NotFound(APIError):
    status_code = 404
    title = 'Not Found'


class Conflict(APIError):
    status_code = 409
    title = 'Conflict'


class InternalError(APIError):
    status_code = 500
    title = 'Internal Server Error'


def error_response(status_code, error, message=None, errors=None):
    body = {'success': False, 'error': error}
    if message is not None:
        body['message'] = message
    if errors is not None:
        body['errors'] = errors
    return jsonify(body), status_code


def _field_name(loc):
    return '.'.join(str(part) for part in loc)


def register_error_handlers(app):
    """Install the handlers that translate exceptions into responses."""

    @app.errorhandler(APIError)
    def handle_api_error(e):
        return error_response(e.status_code, e.title, e.message, e.errors)

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        errors = [
            {'field': _field_name(err['loc']), 'message': err['msg']}
            for err in e.errors()
        ]
        return error_response(400, ValidationFailed.title, 'Invalid request', errors)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        logger.info('Integrity error: %s', e.orig)
        return error_response(409, 'Unique Constraint Violation',
                              'A record with this value already exists')

    @app.errorhandler(NoResultFound)
    def handle_no_result(e):
        return error_response(404, NotFound.title, 'Record not found')

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return error_response(e.code, e.name, e.description)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        logger.exception('Unhandled error: %s', e)
        return error_response(500, InternalError.title, 'An unexpected error occurred')
