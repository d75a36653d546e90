"""
WSGI entry point. Builds the Firebase-backed chat service once at startup
and checks the Firestore connection before serving requests.
"""
import logging
import os

from django.core.exceptions import ImproperlyConfigured
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()

from api.chat_service import build_chat_service, configure_chat_service  # noqa: E402

logger = logging.getLogger("api")

try:
    chat_service = build_chat_service()
except ImproperlyConfigured as e:
    logger.warning(f"Chat service not configured at startup: {e}")
else:
    configure_chat_service(chat_service)
    chat_service.check_connection()
