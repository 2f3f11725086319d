"""
Profile Service for BiLearnHub
Provisions the user document and the derived student profile, once per uid
"""

from enum import Enum
import logging

from services.documents import build_student_profile, build_user_document, resolve_provider
from services.profile_repository import STUDENT_PROFILES, USERS
from utils.auth_middleware import require_principal

logger = logging.getLogger(__name__)


class ProvisionOutcome(Enum):
    CREATED = 'created'
    EXISTS = 'exists'
    SKIPPED = 'skipped'
    FAILED = 'failed'


class ProfileService:
    def __init__(self, repository):
        self.repository = repository

    def create_user_profile(self, principal, provider=None):
        """
        Create users/{uid} from the caller's identity.
        Calling it again for the same uid is a no-op that still reports success.
        """
        require_principal(principal)
        uid = principal['uid']

        if self.repository.get(USERS, uid) is not None:
            logger.info(f"User profile already exists: {uid}")
            return {'success': True, 'message': 'User profile already exists'}

        now = self.repository.now()
        user_data = build_user_document(principal, resolve_provider(provider, principal), now)

        if not self.repository.create_if_absent(USERS, uid, user_data):
            # Lost a race with a concurrent create for the same uid
            return {'success': True, 'message': 'User profile already exists'}

        logger.info(f"User document created for: {uid}")
        return {'success': True, 'message': 'User profile created successfully'}

    def ensure_student_profile(self, uid, identity):
        """
        Reactive path: make sure student_profiles/{uid} exists for a newly observed
        identity record. Never raises; the outcome is logged for reconciliation.
        """
        if not uid or not identity:
            logger.warning(f"Student profile skipped, no identity data: uid={uid} outcome=skipped")
            return ProvisionOutcome.SKIPPED

        try:
            profile = build_student_profile(identity, self.repository.now())
            created = self.repository.create_if_absent(STUDENT_PROFILES, uid, profile)
        except Exception:
            logger.exception(f"Error creating student profile: uid={uid} outcome=failed")
            return ProvisionOutcome.FAILED

        outcome = ProvisionOutcome.CREATED if created else ProvisionOutcome.EXISTS
        logger.info(f"Student profile provisioned: uid={uid} outcome={outcome.value}")
        return outcome
