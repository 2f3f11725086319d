"""
Firebase Admin bootstrap for BiLearnHub
The Firestore client is created on first use so importing the entry
module never requires credentials.
"""

import os
import logging

import firebase_admin
from firebase_admin import credentials, firestore

from config import Config

logger = logging.getLogger(__name__)

_db = None


def init_firebase():
    """
    Initialize the default Firebase app once
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    cred_path = Config.SERVICE_ACCOUNT_PATH
    if cred_path and os.path.exists(cred_path):
        # Local development with a service account key
        app = firebase_admin.initialize_app(credentials.Certificate(cred_path))
    else:
        # Default credentials in the Functions runtime
        app = firebase_admin.initialize_app()

    logger.info(f"Initialized Firebase app: {app.name}")
    return app


def get_db():
    global _db
    if _db is None:
        init_firebase()
        _db = firestore.client()
    return _db
