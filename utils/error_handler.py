"""
Error Handler for BiLearnHub Cloud Functions
Error taxonomy plus the boundary mappings for callable and HTTP responses
"""

from functools import wraps
import logging

from flask import jsonify
from firebase_functions import https_fn

logger = logging.getLogger(__name__)

ErrorCode = https_fn.FunctionsErrorCode


class BiLearnHubError(Exception):
    """Base exception class for BiLearnHub operations"""
    def __init__(self, message, status_code=500, error_code=None, functions_code=ErrorCode.INTERNAL):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.functions_code = functions_code


class ValidationError(BiLearnHubError):
    """Raised when input validation fails"""
    def __init__(self, message, field=None):
        super().__init__(message, status_code=400, error_code='VALIDATION_ERROR',
                         functions_code=ErrorCode.INVALID_ARGUMENT)
        self.field = field


class AuthenticationError(BiLearnHubError):
    """Raised when the caller has no verified principal"""
    def __init__(self, message):
        super().__init__(message, status_code=401, error_code='AUTH_ERROR',
                         functions_code=ErrorCode.UNAUTHENTICATED)


class NotFoundError(BiLearnHubError):
    """Raised when an expected document is absent"""
    def __init__(self, message):
        super().__init__(message, status_code=404, error_code='NOT_FOUND',
                         functions_code=ErrorCode.NOT_FOUND)


class AlreadyExistsError(BiLearnHubError):
    """Raised on duplicate enrollment"""
    def __init__(self, message):
        super().__init__(message, status_code=409, error_code='ALREADY_EXISTS',
                         functions_code=ErrorCode.ALREADY_EXISTS)


class InternalError(BiLearnHubError):
    """Raised when a storage or unexpected fault is surfaced to the caller"""
    def __init__(self, message):
        super().__init__(message, status_code=500, error_code='INTERNAL_ERROR',
                         functions_code=ErrorCode.INTERNAL)


def to_https_error(error, internal_message='Internal error'):
    """
    Convert any exception to a callable HttpsError.
    Unexpected faults only carry the generic internal_message.
    """
    if isinstance(error, https_fn.HttpsError):
        return error

    if not isinstance(error, BiLearnHubError):
        error = InternalError(internal_message)

    return https_fn.HttpsError(code=error.functions_code, message=error.message)


def callable_boundary(internal_message):
    """
    Decorator for callable bodies: log the failure and raise it as an HttpsError
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BiLearnHubError as e:
                logger.warning(f"{f.__name__} rejected: {e.message}")
                raise to_https_error(e, internal_message) from e
            except Exception as e:
                logger.exception(f"{f.__name__} failed: {str(e)}")
                raise to_https_error(e, internal_message) from e
        return decorated_function
    return decorator


def handle_error(error, internal_message='An unexpected error occurred'):
    """
    Convert an exception raised inside a Flask route to a JSON response
    """
    if isinstance(error, BiLearnHubError):
        logger.warning(f"BiLearnHub error: {error.message}")
        return jsonify({
            'error': error.message,
            'error_code': error.error_code,
            'status': 'error'
        }), error.status_code

    logger.exception(f"Unhandled error: {str(error)}")
    internal = InternalError(internal_message)
    return jsonify({
        'error': internal.message,
        'error_code': internal.error_code,
        'status': 'error'
    }), internal.status_code
