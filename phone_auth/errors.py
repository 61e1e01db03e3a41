"""Domain errors for the auth flows and their HTTP mapping.

Every failure a flow can report is an ``AuthError`` carrying the HTTP status
and the stable ``error`` string returned to the client. Anything else that
escapes a view is treated as an internal error.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base class for failures that map to a JSON error response."""

    status_code = 500
    message = 'Internal server error.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message}


class ValidationError(AuthError):
    status_code = 400
    message = 'Invalid input or format.'


class RateLimited(AuthError):
    status_code = 429
    message = 'Too many requests. Please wait before requesting a new code.'


class NotFound(AuthError):
    status_code = 404
    message = 'Not found.'


class NotRegistered(NotFound):
    message = 'Phone not registered.'


class UserNotFound(NotFound):
    message = 'User not found.'


class Unauthorized(AuthError):
    status_code = 401
    message = 'Unauthorized.'


class InvalidCode(Unauthorized):
    message = 'Verification code invalid.'


class PasswordNotSet(Unauthorized):
    message = 'Password not set.'


class IncorrectPassword(Unauthorized):
    message = 'Incorrect password.'


class Conflict(AuthError):
    status_code = 409
    message = 'Username already exists.'


class PreconditionFailed(AuthError):
    status_code = 412
    message = 'Agreement not accepted.'


class InternalError(AuthError):
    pass


def register_error_handlers(app):
    """Attach JSON error handlers to the Flask app."""

    @app.errorhandler(AuthError)
    def handle_auth_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(429)
    def handle_too_many_requests(error):
        return jsonify({'error': 'Too many requests.'}), 429

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception('Unhandled error: %s', error)
        return jsonify(InternalError().to_dict()), 500
