"""
Chat operations over Firebase: registration, login, presence, messaging.

The service holds no state of its own. Identity, document store and push
handles are built once at startup (see config/wsgi.py) and injected, so tests
can swap them for in-memory fakes through configure_chat_service().
"""
import logging
from typing import Any, Dict, List, Optional

from django.core.exceptions import ImproperlyConfigured
from firebase_admin import exceptions as firebase_exceptions
from firebase_admin import firestore

from .constants import (
    CONNECTION_CHECK_COLLECTION,
    CONNECTION_CHECK_DOC,
    MESSAGES_COLLECTION,
    NEW_MESSAGE_TITLE,
    STATUS_OFFLINE,
    USERS_COLLECTION,
)
from .errors import AuthError, NotFoundError, ValidationError
from .firebase_service import FirebaseIdentity, get_firebase_app, get_firestore
from .push_service import FCMService
from .utils import check_password, hash_password, iso_timestamp

logger = logging.getLogger("api")


class ChatService:

    def __init__(self, identity, db, push):
        self.identity = identity
        self.db = db
        self.push = push

    def _users(self):
        return self.db.collection(USERS_COLLECTION)

    def _messages(self):
        return self.db.collection(MESSAGES_COLLECTION)

    def check_connection(self) -> bool:
        """Read a known document to confirm Firestore is reachable."""
        try:
            doc = self.db.collection(CONNECTION_CHECK_COLLECTION).document(CONNECTION_CHECK_DOC).get()
        except Exception as e:
            logger.error(f"Error connecting to Firestore: {e}")
            return False

        if doc.exists:
            logger.info("Firestore is connected!")
        else:
            logger.info("Firestore is connected, but the connection_check document doesn't exist.")
        return True

    # =========================================================================
    # Accounts
    # =========================================================================

    def register(self, email: Optional[str], password: Optional[str]):
        """
        Create the identity account, then mirror it into users/{uid}.

        The two writes are not atomic: if the Firestore write fails the
        identity account remains.

        Returns:
            The identity provider's user record
        """
        if not email or not password:
            raise ValidationError("email and password are required")

        # Hashed first: a failure here must not leave an identity account behind
        password_hash = hash_password(password)

        try:
            user_record = self.identity.create_user(email, password)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise ValidationError(str(e)) from e

        self._users().document(user_record.uid).set({
            "email": user_record.email,
            "password": password_hash,
            "status": STATUS_OFFLINE,
            "notifications": 0,
            "createdAt": iso_timestamp(),
        })

        logger.info(f"Registered user {user_record.uid}")
        return user_record

    def login(self, email: Optional[str], password: Optional[str]) -> str:
        """Verify the password against the stored hash and mint a custom token."""
        if not email or not password:
            raise ValidationError("email and password are required")

        user = self.identity.get_user_by_email(email)

        doc = self._users().document(user.uid).get()
        if not doc.exists:
            raise NotFoundError("User not found")

        stored_hash = (doc.to_dict() or {}).get("password")
        if not stored_hash or not check_password(password, stored_hash):
            raise AuthError("Invalid login details")

        return self.identity.create_custom_token(user.uid)

    def logout(self, uid: Optional[str]) -> None:
        if not uid:
            raise ValidationError("uid is required")

        # No ownership check: any caller may mark any uid offline
        self._users().document(uid).update({"status": STATUS_OFFLINE})

    def list_users(self) -> List[Dict[str, Any]]:
        """All user documents verbatim, password hashes included."""
        docs = list(self._users().stream())
        if not docs:
            raise NotFoundError("No users found")
        return [{"id": doc.id, **(doc.to_dict() or {})} for doc in docs]

    # =========================================================================
    # Messages
    # =========================================================================

    def send_message(
        self,
        sender_uid: Optional[str],
        receiver_uid: Optional[str],
        text: Optional[str],
    ) -> Dict[str, Any]:
        """
        Store a message, notify the receiver and bump their unread counter.

        The push is best-effort; a failed send is logged and does not affect
        the result. The counter is only touched when the receiver's user
        document exists.
        """
        if not all([sender_uid, receiver_uid, text]):
            raise ValidationError("senderUid, receiverUid and message are required")

        message = {
            "senderUid": sender_uid,
            "receiverUid": receiver_uid,
            "message": text,
            "timestamp": iso_timestamp(),
        }
        self._messages().add(message)

        receiver_ref = self._users().document(receiver_uid)
        receiver_doc = receiver_ref.get()
        receiver = receiver_doc.to_dict() if receiver_doc.exists else None

        fcm_token = (receiver or {}).get("fcmToken")
        if fcm_token:
            result = self.push.send_notification(fcm_token, title=NEW_MESSAGE_TITLE, body=text)
            if not result.success:
                logger.warning(f"Push to {receiver_uid} failed: {result.error}")

        if receiver is not None:
            receiver_ref.update({"notifications": firestore.Increment(1)})

        return message

    def get_messages(self, user1_uid: str, user2_uid: str) -> List[Dict[str, Any]]:
        """
        Messages whose sender and receiver are both in {user1, user2}, oldest first.

        This also matches messages a user sent to themselves.
        """
        pair = [user1_uid, user2_uid]
        query = (
            self._messages()
            .where("senderUid", "in", pair)
            .where("receiverUid", "in", pair)
            .order_by("timestamp", direction=firestore.Query.ASCENDING)
        )
        return [doc.to_dict() for doc in query.stream()]


def build_chat_service() -> ChatService:
    """Construct a ChatService backed by the live Firebase project."""
    app = get_firebase_app()
    if app is None:
        raise ImproperlyConfigured("Firebase Admin could not be initialized")

    return ChatService(
        identity=FirebaseIdentity(app),
        db=get_firestore(app),
        push=FCMService(app),
    )


_chat_service: Optional[ChatService] = None


def configure_chat_service(service: Optional[ChatService]) -> None:
    global _chat_service
    _chat_service = service


def get_chat_service() -> ChatService:
    if _chat_service is None:
        configure_chat_service(build_chat_service())
    return _chat_service
