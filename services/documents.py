"""
Default document shapes for the profile collections
"""

import logging

logger = logging.getLogger(__name__)

PROVIDERS = ('email', 'google')
DEFAULT_PROVIDER = 'email'
DEFAULT_ROLE = 'student'

DEFAULT_PREFERENCES = {
    'notifications': True,
    'theme': 'light',
    'language': 'en'
}


def resolve_provider(requested, principal):
    """
    Pick the provider tag for a new user document.
    An explicit supported value wins, then the token's sign-in provider, then 'email'.
    """
    if requested in PROVIDERS:
        return requested
    if requested is not None:
        logger.warning(f"Unsupported provider '{requested}' ignored for: {principal.get('uid')}")
    if principal.get('provider') in PROVIDERS:
        return principal['provider']
    return DEFAULT_PROVIDER


def build_user_document(principal, provider, now):
    return {
        'email': principal.get('email'),
        'displayName': principal.get('displayName') or None,
        'photoURL': principal.get('photoURL') or None,
        'emailVerified': bool(principal.get('emailVerified', False)),
        'role': DEFAULT_ROLE,
        'provider': provider,
        'createdAt': now,
        'updatedAt': now,
        'lastSignIn': now
    }


def build_student_profile(identity, now):
    """
    Student profile derived from an identity record, with all student state at defaults
    """
    return {
        'email': identity.get('email'),
        'displayName': identity.get('displayName') or None,
        'photoURL': identity.get('photoURL') or None,
        'role': DEFAULT_ROLE,
        'enrolledCourses': [],
        'progress': {},
        'linkedTeacherUID': None,
        'preferences': dict(DEFAULT_PREFERENCES),
        'stats': {
            'coursesCompleted': 0,
            'totalLearningTime': 0,
            'streakDays': 0,
            'lastActiveDate': now
        },
        'createdAt': now,
        'updatedAt': now
    }


def build_progress_record(now):
    return {
        'startDate': now,
        'completedLessons': [],
        'currentLesson': None,
        'progressPercentage': 0,
        'lastAccessDate': now
    }
