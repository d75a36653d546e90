import logging

from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..chat_service import get_chat_service
from ..errors import NotFoundError
from ..http import error_response

logger = logging.getLogger("api")


@csrf_exempt
def list_users(request):
    """
    Return every users/{uid} document, including stored password hashes.
    """
    logger.info(f"[USERS] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "GET":
        return HttpResponseNotAllowed(["GET"])

    try:
        users = get_chat_service().list_users()
    except NotFoundError as exc:
        return error_response("USERS", exc)
    except Exception as exc:
        logger.error(f"[USERS] Error fetching users: {exc}")
        return JsonResponse({"message": "Error fetching users"}, status=500)

    return JsonResponse(users, safe=False)
