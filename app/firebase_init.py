import logging
import os
import firebase_admin
from firebase_admin import credentials, firestore

logger = logging.getLogger(__name__)

_app = None
_db = None


def _load_credentials():
    """Service-account file if one is present, else application default credentials."""
    cred_path = os.environ.get('GOOGLE_APPLICATION_CREDENTIALS', './firebase-service-account.json')
    if os.path.exists(cred_path):
        return credentials.Certificate(cred_path)
    return credentials.ApplicationDefault()


def init_firebase(app_config=None):
    """Initialize the Firebase Admin app once per process."""
    global _app, _db

    if _app is not None:
        return

    project_id = (app_config or {}).get('FIREBASE_PROJECT_ID') or os.environ.get('FIREBASE_PROJECT_ID', '')
    options = {'projectId': project_id} if project_id else None

    _app = firebase_admin.initialize_app(_load_credentials(), options=options)
    _db = firestore.client()

    emulator = os.environ.get('FIRESTORE_EMULATOR_HOST')
    if emulator:
        logger.info(f'Firestore client talking to emulator at {emulator}')


def get_db():
    global _db
    if _db is None:
        init_firebase()
    return _db
