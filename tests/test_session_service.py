import pytest

from services.profile_repository import STUDENT_PROFILES, USERS
from utils.error_handler import AuthenticationError, NotFoundError


class TestUpdateLastSignIn:

    def test_touches_both_documents(self, services, provisioned, principal):
        before = provisioned.get(USERS, 'u1')

        result = services['session'].update_last_sign_in(principal)

        assert result == {'success': True}
        user = provisioned.document(USERS, 'u1')
        profile = provisioned.document(STUDENT_PROFILES, 'u1')
        assert user['lastSignIn'] > before['lastSignIn']
        assert user['updatedAt'] == user['lastSignIn']
        assert profile['stats']['lastActiveDate'] == user['lastSignIn']
        assert profile['updatedAt'] == user['lastSignIn']
        # Nested update leaves sibling stats untouched
        assert profile['stats']['streakDays'] == 0

    def test_missing_student_profile_writes_nothing(self, services, repository, principal):
        services['profile'].create_user_profile(principal)
        last_sign_in = repository.document(USERS, 'u1')['lastSignIn']

        with pytest.raises(NotFoundError):
            services['session'].update_last_sign_in(principal)

        assert repository.document(USERS, 'u1')['lastSignIn'] == last_sign_in

    def test_missing_user_document(self, services, repository, principal, identity_data):
        services['profile'].ensure_student_profile('u1', identity_data)
        profile_before = repository.get(STUDENT_PROFILES, 'u1')

        with pytest.raises(NotFoundError):
            services['session'].update_last_sign_in(principal)

        assert repository.document(STUDENT_PROFILES, 'u1') == profile_before

    def test_requires_principal(self, services, provisioned):
        with pytest.raises(AuthenticationError):
            services['session'].update_last_sign_in({'uid': ''})
        assert provisioned.writes == 0
