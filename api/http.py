import json
import logging
from typing import Tuple

from django.http import JsonResponse

from .errors import ChatError

logger = logging.getLogger("api")


def json_body(request) -> Tuple[dict, JsonResponse]:
    try:
        body = request.body.decode("utf-8") if request.body else "{}"
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data, None
    except (json.JSONDecodeError, ValueError) as exc:
        return None, JsonResponse({"message": f"invalid_json: {exc}"}, status=400)


def error_response(tag: str, exc: Exception, default_status: int = 400) -> JsonResponse:
    """Map an exception raised by a chat operation to a {message} response.

    ChatError subclasses carry their own status; anything else is reported
    with its raw text and ``default_status``.
    """
    if isinstance(exc, ChatError):
        logger.warning(f"[{tag}] {exc.status_code}: {exc.message}")
        return JsonResponse({"message": exc.message}, status=exc.status_code)

    logger.error(f"[{tag}] {type(exc).__name__}: {exc}")
    return JsonResponse({"message": str(exc)}, status=default_status)
