"""
Firebase Admin bootstrap and the identity-service wrapper.

Firestore Collections:
- users/{uid}: email, password hash, status, notifications, createdAt, fcmToken
- messages/{autoId}: senderUid, receiverUid, message, timestamp
"""
import json
import os
import logging

from .constants import DEFAULT_SERVICE_ACCOUNT_PATH

logger = logging.getLogger("api")

# Firebase Admin initialization
_firebase_app = None
_firebase_init_attempted = False


def get_firebase_app():
    """Get or initialize Firebase Admin app"""
    global _firebase_app, _firebase_init_attempted

    if _firebase_app is not None:
        return _firebase_app

    if _firebase_init_attempted:
        # Already tried and failed
        return None

    _firebase_init_attempted = True

    import firebase_admin
    from firebase_admin import credentials

    use_emulator = os.environ.get("FIREBASE_USE_EMULATOR", "false").lower() == "true"
    project_id = os.environ.get("FIREBASE_PROJECT_ID")
    database_url = os.environ.get("FIREBASE_DATABASE_URL")

    logger.info(f"Firebase init: use_emulator={use_emulator}, project_id={project_id}")

    options = {}
    if database_url:
        # Realtime Database URL, configured for parity with the web client
        options["databaseURL"] = database_url

    if use_emulator:
        firestore_host = os.environ.get("FIRESTORE_EMULATOR_HOST", "localhost:8080")
        os.environ["FIRESTORE_EMULATOR_HOST"] = firestore_host
        options["projectId"] = project_id or "demo-project"

        try:
            _firebase_app = firebase_admin.initialize_app(credential=None, options=options)
            logger.info(f"Firebase Admin initialized with EMULATOR (Firestore: {firestore_host})")
        except ValueError:
            # Already initialized
            _firebase_app = firebase_admin.get_app()
        return _firebase_app

    service_account_json = os.environ.get("FIREBASE_SERVICE_ACCOUNT")
    service_account_path = os.environ.get(
        "FIREBASE_SERVICE_ACCOUNT_PATH", DEFAULT_SERVICE_ACCOUNT_PATH
    )

    cred = None
    if service_account_json:
        try:
            cred = credentials.Certificate(json.loads(service_account_json))
            logger.info("Using FIREBASE_SERVICE_ACCOUNT env var")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid FIREBASE_SERVICE_ACCOUNT JSON: {e}")
    elif service_account_path and os.path.exists(service_account_path):
        cred = credentials.Certificate(service_account_path)
        logger.info(f"Using service account from {service_account_path}")

    if cred is None:
        logger.warning("Firebase credentials not found - Firestore operations will fail")
        return None

    if project_id:
        options["projectId"] = project_id

    try:
        _firebase_app = firebase_admin.initialize_app(cred, options=options or None)
        logger.info(f"Firebase Admin initialized (project: {cred.project_id})")
    except ValueError:
        _firebase_app = firebase_admin.get_app()

    return _firebase_app


def get_firestore(app):
    """Get a Firestore client bound to the given app"""
    from firebase_admin import firestore
    return firestore.client(app)


class FirebaseIdentity:
    """Firebase Authentication calls used by the chat endpoints."""

    def __init__(self, app=None):
        self.app = app

    def create_user(self, email: str, password: str):
        from firebase_admin import auth
        return auth.create_user(email=email, password=password, app=self.app)

    def get_user_by_email(self, email: str):
        from firebase_admin import auth
        return auth.get_user_by_email(email, app=self.app)

    def create_custom_token(self, uid: str) -> str:
        from firebase_admin import auth
        token = auth.create_custom_token(uid, app=self.app)
        if isinstance(token, bytes):
            return token.decode("utf-8")
        return token
