import pytest
from unittest.mock import Mock
import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tests.fakes import InMemoryProfileRepository
from services.enrollment_service import EnrollmentService
from services.profile_service import ProfileService
from services.session_service import SessionService


@pytest.fixture
def mock_firestore():
    """Mock Firestore database"""
    return Mock()

@pytest.fixture
def repository():
    return InMemoryProfileRepository()

@pytest.fixture
def services(repository):
    return {
        'profile': ProfileService(repository),
        'session': SessionService(repository),
        'enrollment': EnrollmentService(repository),
    }

@pytest.fixture
def principal():
    """Verified principal for a student who signed up with email"""
    return {
        'uid': 'u1',
        'email': 'student@example.com',
        'displayName': 'Test Student',
        'photoURL': None,
        'emailVerified': True,
        'provider': 'email',
    }

@pytest.fixture
def identity_data():
    """Identity record as seen by the reactive initializer"""
    return {
        'email': 'student@example.com',
        'displayName': 'Test Student',
        'photoURL': 'https://example.com/avatar.png',
    }

@pytest.fixture
def provisioned(services, repository, principal, identity_data):
    """Both profile documents exist for the principal"""
    services['profile'].ensure_student_profile(principal['uid'], identity_data)
    services['profile'].create_user_profile(principal)
    repository.writes = 0
    return repository
