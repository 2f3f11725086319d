"""
Authentication Middleware for BiLearnHub
Builds the verified principal for callables and HTTP requests
"""

from functools import wraps
from flask import request, jsonify
from firebase_admin import auth
import logging

from utils.error_handler import AuthenticationError

logger = logging.getLogger(__name__)

# Firebase sign_in_provider values mapped to the stored provider tag
SIGN_IN_PROVIDERS = {
    'password': 'email',
    'google.com': 'google',
}


def principal_from_claims(uid, claims):
    """
    Build the principal dict from verified Firebase ID token claims
    """
    claims = claims or {}
    firebase_claims = claims.get('firebase') or {}
    sign_in_provider = firebase_claims.get('sign_in_provider')

    return {
        'uid': uid,
        'email': claims.get('email'),
        'displayName': claims.get('name'),
        'photoURL': claims.get('picture'),
        'emailVerified': bool(claims.get('email_verified', False)),
        'provider': SIGN_IN_PROVIDERS.get(sign_in_provider),
    }


def principal_from_callable(req):
    """
    Extract the principal from a callable request, or None when the caller is anonymous
    """
    auth_data = getattr(req, 'auth', None)
    if auth_data is None or not getattr(auth_data, 'uid', None):
        return None
    return principal_from_claims(auth_data.uid, getattr(auth_data, 'token', None))


def require_principal(principal):
    """
    Access gate applied at the top of every operation
    """
    if not principal or not principal.get('uid'):
        raise AuthenticationError('User must be authenticated')
    return principal


def require_auth(f):
    """
    Decorator to require a verified Firebase ID token for HTTP endpoints
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            auth_header = request.headers.get('Authorization')
            if not auth_header:
                return jsonify({'error': 'Authorization header required'}), 401

            token = auth_header.replace('Bearer ', '').strip()
            if not token:
                return jsonify({'error': 'Valid token required'}), 401

            decoded_token = auth.verify_id_token(token, check_revoked=True)

        except auth.ExpiredIdTokenError:
            logger.warning("Expired token provided")
            return jsonify({'error': 'Token expired'}), 401
        except auth.RevokedIdTokenError:
            logger.warning("Revoked token provided")
            return jsonify({'error': 'Token revoked'}), 401
        except auth.InvalidIdTokenError:
            logger.warning("Invalid token provided")
            return jsonify({'error': 'Invalid token'}), 401
        except Exception as e:
            logger.error(f"Authentication error: {str(e)}")
            return jsonify({'error': 'Authentication failed'}), 401

        request.current_user = principal_from_claims(decoded_token['uid'], decoded_token)
        return f(*args, **kwargs)

    return decorated_function
