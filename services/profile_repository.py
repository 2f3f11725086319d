"""
Profile Repository for BiLearnHub
Firestore access for the profile aggregate: users/{uid} and student_profiles/{uid}
"""

import logging

from firebase_admin import firestore
from google.api_core import exceptions as gcp_exceptions
from google.cloud.firestore_v1.field_path import FieldPath

from utils.error_handler import NotFoundError

logger = logging.getLogger(__name__)

USERS = 'users'
STUDENT_PROFILES = 'student_profiles'


def field_path(*segments):
    """
    Render a dotted update key, quoting segments that are not plain identifiers
    """
    return FieldPath(*segments).to_api_repr()


class ProfileRepository:
    def __init__(self, db):
        self.db = db

    def _document(self, collection, uid):
        return self.db.collection(collection).document(uid)

    def now(self):
        """
        Timestamp value for writes. The store assigns its commit time, which keeps
        updatedAt non-decreasing across concurrent writers.
        """
        return firestore.SERVER_TIMESTAMP

    def get(self, collection, uid):
        """
        Get a document as a dict, or None if it does not exist
        """
        snapshot = self._document(collection, uid).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def create_if_absent(self, collection, uid, data):
        """
        Create the document only if it is missing.
        Returns True when this call created it, False when it already existed.
        """
        try:
            self._document(collection, uid).create(data)
        except gcp_exceptions.Conflict:
            logger.info(f"{collection}/{uid} already exists, create skipped")
            return False

        logger.info(f"Created {collection}/{uid}")
        return True

    def update_fields(self, collection, uid, fields):
        """
        Single-document field update, part of the aggregate interface.
        No current operation needs it: multi-document writes use
        atomic_multi_update and read-check-write uses update_in_transaction.
        """
        try:
            self._document(collection, uid).update(fields)
        except gcp_exceptions.NotFound:
            raise NotFoundError(f"Document {collection}/{uid} not found")

    def atomic_multi_update(self, updates):
        """
        Apply (collection, uid, fields) updates in one batched commit.
        A missing document fails the whole batch and nothing is written.
        """
        batch = self.db.batch()
        for collection, uid, fields in updates:
            batch.update(self._document(collection, uid), fields)

        try:
            batch.commit()
        except gcp_exceptions.NotFound:
            targets = ', '.join(f"{collection}/{uid}" for collection, uid, _ in updates)
            raise NotFoundError(f"One or more documents not found: {targets}")

    def update_in_transaction(self, collection, uid, mutate):
        """
        Read the document inside a transaction and write the fields returned by
        mutate(current). current is None when the document does not exist.
        The transaction is retried on contention, so mutate must not have side effects.
        Exceptions raised by mutate abort the transaction without writing.
        """
        doc_ref = self._document(collection, uid)

        @firestore.transactional
        def apply(transaction):
            snapshot = doc_ref.get(transaction=transaction)
            current = snapshot.to_dict() if snapshot.exists else None
            fields = mutate(current)
            transaction.update(doc_ref, fields)
            return fields

        return apply(self.db.transaction())
