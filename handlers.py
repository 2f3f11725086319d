"""
Callable handlers for BiLearnHub
Plain functions over the callable request so they run without the Functions runtime.
main.py binds them to the deployed function names.
"""

import logging

from services.enrollment_service import EnrollmentService
from services.profile_repository import ProfileRepository
from services.profile_service import ProfileService, ProvisionOutcome
from services.session_service import SessionService
from utils.auth_middleware import principal_from_callable
from utils.error_handler import callable_boundary
from utils.firebase_init import get_db

logger = logging.getLogger(__name__)

_services = None


def get_services():
    """
    Build the service set on first use
    """
    global _services
    if _services is None:
        repository = ProfileRepository(get_db())
        _services = {
            'profile': ProfileService(repository),
            'session': SessionService(repository),
            'enrollment': EnrollmentService(repository),
        }
    return _services


def _request_data(req):
    data = getattr(req, 'data', None)
    return data if isinstance(data, dict) else {}


@callable_boundary('Failed to create user profile')
def create_user_profile(req):
    provider = _request_data(req).get('provider')
    return get_services()['profile'].create_user_profile(principal_from_callable(req), provider)


@callable_boundary('Failed to update last sign-in')
def update_last_sign_in(req):
    return get_services()['session'].update_last_sign_in(principal_from_callable(req))


@callable_boundary('Failed to enroll in course')
def enroll_in_course(req):
    course_id = _request_data(req).get('courseId')
    return get_services()['enrollment'].enroll_in_course(principal_from_callable(req), course_id)


def on_user_create(event):
    """
    Provision the student profile for a newly created identity record.
    The uid is the trigger path's only wildcard, whatever it is named.
    """
    uid = next(iter((event.params or {}).values()), None)
    try:
        snapshot = event.data
        identity = snapshot.to_dict() if snapshot is not None else None
        return get_services()['profile'].ensure_student_profile(uid, identity)
    except Exception:
        logger.exception(f"Error provisioning student profile: uid={uid} outcome=failed")
        return ProvisionOutcome.FAILED
