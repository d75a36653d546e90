from .health import health
from .accounts import register, login, logout
from .users import list_users
from .messages import send_message, get_messages

__all__ = [
    "health",
    "register",
    "login",
    "logout",
    "list_users",
    "send_message",
    "get_messages",
]
