"""
BiLearnHub Backend - Student profile and enrollment functions
Firebase Cloud Functions + Firestore Backend

Entry point loaded by the Functions runtime. Callables keep the names the
web client invokes; the Flask app is served as the `api` HTTP function.
"""

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from firebase_functions import firestore_fn, https_fn, options

import handlers
from config import Config
from utils.auth_middleware import require_auth
from utils.error_handler import handle_error

# Configure logging
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

options.set_global_options(max_instances=Config.MAX_INSTANCES)

# Initialize Flask app
app = Flask(__name__)
CORS(app, origins=Config.allowed_origins())


# Health check endpoint
@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': 'bilearnhub-functions',
        'version': Config.API_VERSION
    })

# ============= PROFILE ENDPOINTS =============

@app.route('/profile', methods=['POST'])
@require_auth
def create_profile():
    """Create the caller's user profile"""
    try:
        data = request.get_json(silent=True) or {}
        result = handlers.get_services()['profile'].create_user_profile(
            request.current_user,
            data.get('provider')
        )
        return jsonify(result)
    except Exception as e:
        return handle_error(e, 'Failed to create user profile')

@app.route('/profile/sign-in', methods=['POST'])
@require_auth
def record_sign_in():
    """Record a sign-in on both profile documents"""
    try:
        result = handlers.get_services()['session'].update_last_sign_in(request.current_user)
        return jsonify(result)
    except Exception as e:
        return handle_error(e, 'Failed to update last sign-in')

# ============= ENROLLMENT ENDPOINTS =============

@app.route('/enrollments', methods=['POST'])
@require_auth
def enroll():
    """Enroll the caller in a course"""
    try:
        data = request.get_json(silent=True) or {}
        result = handlers.get_services()['enrollment'].enroll_in_course(
            request.current_user,
            data.get('courseId')
        )
        return jsonify(result), 201
    except Exception as e:
        return handle_error(e, 'Failed to enroll in course')

# Error handlers
@app.errorhandler(404)
def not_found(error):
    return jsonify({'error': 'Endpoint not found'}), 404

@app.errorhandler(405)
def method_not_allowed(error):
    return jsonify({'error': 'Method not allowed'}), 405

# ============= CLOUD FUNCTIONS =============

# Function names are part of the client contract, hence camelCase

@https_fn.on_call()
def createUserProfile(req: https_fn.CallableRequest):
    return handlers.create_user_profile(req)

@https_fn.on_call()
def updateLastSignIn(req: https_fn.CallableRequest):
    return handlers.update_last_sign_in(req)

@https_fn.on_call()
def enrollInCourse(req: https_fn.CallableRequest):
    return handlers.enroll_in_course(req)

@firestore_fn.on_document_created(document=Config.PROFILE_TRIGGER_DOCUMENT)
def onUserCreate(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    handlers.on_user_create(event)

@https_fn.on_request(
    cors=options.CorsOptions(
        cors_origins=Config.allowed_origins(),
        cors_methods=["GET", "POST", "OPTIONS"]
    )
)
def api(req: https_fn.Request) -> https_fn.Response:
    """HTTP gateway for clients that do not use the callable protocol"""
    with app.request_context(req.environ):
        return app.full_dispatch_request()

# For local development
if __name__ == '__main__':
    app.run(debug=Config.ENVIRONMENT == 'development', host='0.0.0.0', port=8080)
