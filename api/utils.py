from datetime import datetime, timezone as dt_timezone

import bcrypt
from django.utils import timezone

from .constants import BCRYPT_MAX_PASSWORD_BYTES, PASSWORD_HASH_ROUNDS


def iso_timestamp(value: datetime = None) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-05-01T10:00:00.000Z.

    The fixed width keeps lexicographic order equal to chronological order,
    which the messages query relies on when ordering by timestamp.
    """
    value = value or timezone.now()
    if timezone.is_naive(value):
        value = value.replace(tzinfo=dt_timezone.utc)
    value = value.astimezone(dt_timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _password_bytes(password: str) -> bytes:
    # bcrypt only uses the first 72 bytes; longer input is truncated like bcryptjs
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    """False on mismatch, including stored values that are not bcrypt hashes."""
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        return False


def _millis_to_iso(millis):
    if millis is None:
        return None
    return iso_timestamp(datetime.fromtimestamp(millis / 1000, tz=dt_timezone.utc))


def serialize_user_record(record) -> dict:
    """JSON view of a firebase_admin.auth.UserRecord."""
    metadata = getattr(record, "user_metadata", None)
    return {
        "uid": record.uid,
        "email": getattr(record, "email", None),
        "emailVerified": bool(getattr(record, "email_verified", False)),
        "disabled": bool(getattr(record, "disabled", False)),
        "displayName": getattr(record, "display_name", None),
        "metadata": {
            "creationTime": _millis_to_iso(getattr(metadata, "creation_timestamp", None)),
            "lastSignInTime": _millis_to_iso(getattr(metadata, "last_sign_in_timestamp", None)),
        },
    }
