"""
Session Service for BiLearnHub
Records sign-in activity on both profile documents together
"""

import logging

from services.profile_repository import STUDENT_PROFILES, USERS, field_path
from utils.auth_middleware import require_principal

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self, repository):
        self.repository = repository

    def update_last_sign_in(self, principal):
        """
        Stamp users/{uid}.lastSignIn and student_profiles/{uid}.stats.lastActiveDate
        in one atomic commit. If either document is missing neither is touched.
        """
        require_principal(principal)
        uid = principal['uid']
        now = self.repository.now()

        self.repository.atomic_multi_update([
            (USERS, uid, {
                'lastSignIn': now,
                'updatedAt': now
            }),
            (STUDENT_PROFILES, uid, {
                field_path('stats', 'lastActiveDate'): now,
                'updatedAt': now
            }),
        ])

        logger.info(f"Updated last sign-in for: {uid}")
        return {'success': True}
