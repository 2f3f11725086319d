"""
Configuration for BiLearnHub Cloud Functions
Values are read from the environment (and a local .env file in development)
"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    ENVIRONMENT = os.environ.get('ENVIRONMENT', 'production')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
    MAX_INSTANCES = int(os.environ.get('MAX_INSTANCES', 10))
    ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*')
    SERVICE_ACCOUNT_PATH = os.environ.get(
        'SERVICE_ACCOUNT_PATH',
        os.path.join(os.path.dirname(__file__), 'serviceAccountKey.json')
    )
    # Creation of a document at this path provisions the student profile
    PROFILE_TRIGGER_DOCUMENT = os.environ.get('PROFILE_TRIGGER_DOCUMENT', 'users/{userId}')
    API_VERSION = os.environ.get('API_VERSION', '1.0.0')

    @classmethod
    def allowed_origins(cls):
        origins = []
        for origin in cls.ALLOWED_ORIGINS.split(','):
            origin = origin.strip()
            if origin:
                origins.append(origin)
        return origins or ['*']
