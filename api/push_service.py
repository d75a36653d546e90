"""
Push notification dispatch via Firebase Cloud Messaging (Firebase Admin SDK).
"""
import logging
from dataclasses import dataclass
from typing import Optional

from firebase_admin import messaging

logger = logging.getLogger("api")


@dataclass
class PushResult:
    """Result of a push notification attempt"""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


class FCMService:
    """
    Firebase Cloud Messaging sender.

    Delivery is best-effort: every failure is logged and returned as a
    PushResult, never raised to the caller.
    """

    def __init__(self, app=None):
        self.app = app

    def send_notification(self, device_token: str, title: str, body: str) -> PushResult:
        """
        Send a notification message to a single device.

        Args:
            device_token: The FCM registration token stored on the user record
            title: Notification title
            body: Notification body text

        Returns:
            PushResult with success status and details
        """
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            token=device_token,
        )

        try:
            response = messaging.send(message, app=self.app)
            logger.info(f"[FCM] Message sent successfully: {response}")
            return PushResult(success=True, message_id=response)

        except messaging.UnregisteredError:
            logger.warning(f"[FCM] Token unregistered: {device_token[:20]}...")
            return PushResult(
                success=False,
                error="Token unregistered",
                error_code="UNREGISTERED",
            )
        except messaging.SenderIdMismatchError:
            logger.error("[FCM] Sender ID mismatch")
            return PushResult(
                success=False,
                error="Sender ID mismatch",
                error_code="SENDER_ID_MISMATCH",
            )
        except Exception as e:
            logger.error(f"[FCM] Send error: {e}")
            return PushResult(
                success=False,
                error=str(e),
                error_code="exception",
            )
