import pytest
import json

from main import app
from services.profile_repository import STUDENT_PROFILES


@pytest.fixture
def client(services, mocker):
    """Test client for Flask app backed by the in-memory repository"""
    mocker.patch('handlers.get_services', return_value=services)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client

@pytest.fixture
def verified_token(mocker):
    return mocker.patch('utils.auth_middleware.auth.verify_id_token', return_value={
        'uid': 'u1',
        'email': 'student@example.com',
        'email_verified': True,
        'firebase': {'sign_in_provider': 'password'},
    })

AUTH_HEADERS = {'Authorization': 'Bearer fake-token'}


class TestAPIEndpoints:

    def test_health_check(self, client):
        """Test health check endpoint"""
        response = client.get('/health')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['status'] == 'healthy'

    def test_create_profile(self, client, verified_token):
        response = client.post('/profile', json={'provider': 'email'}, headers=AUTH_HEADERS)

        assert response.status_code == 200
        assert response.get_json()['message'] == 'User profile created successfully'
        verified_token.assert_called_once_with('fake-token', check_revoked=True)

    def test_create_profile_unauthorized(self, client):
        response = client.post('/profile', json={})
        assert response.status_code == 401

    def test_invalid_token(self, client, mocker):
        from firebase_admin import auth
        mocker.patch('utils.auth_middleware.auth.verify_id_token',
                     side_effect=auth.InvalidIdTokenError('bad token'))

        response = client.post('/enrollments', json={'courseId': 'c1'}, headers=AUTH_HEADERS)

        assert response.status_code == 401
        assert response.get_json()['error'] == 'Invalid token'

    def test_sign_in_requires_both_documents(self, client, verified_token):
        client.post('/profile', json={}, headers=AUTH_HEADERS)

        response = client.post('/profile/sign-in', headers=AUTH_HEADERS)

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'NOT_FOUND'

    def test_enroll_flow(self, client, verified_token, services, repository, identity_data):
        services['profile'].ensure_student_profile('u1', identity_data)

        first = client.post('/enrollments', json={'courseId': 'c1'}, headers=AUTH_HEADERS)
        second = client.post('/enrollments', json={'courseId': 'c1'}, headers=AUTH_HEADERS)
        missing = client.post('/enrollments', json={}, headers=AUTH_HEADERS)

        assert first.status_code == 201
        assert second.status_code == 409
        assert missing.status_code == 400
        assert repository.document(STUDENT_PROFILES, 'u1')['enrolledCourses'] == ['c1']

    def test_unknown_endpoint(self, client):
        response = client.get('/does-not-exist')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Endpoint not found'
