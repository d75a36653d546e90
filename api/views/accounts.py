import logging

from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..chat_service import get_chat_service
from ..http import error_response, json_body
from ..utils import serialize_user_record

logger = logging.getLogger("api")


@csrf_exempt
def register(request):
    """
    Create a Firebase Auth account and its users/{uid} document.
    """
    logger.info(f"[REGISTER] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = json_body(request)
    if error:
        return error

    email = data.get("email")
    logger.info(f"[REGISTER] email={email}")

    try:
        user_record = get_chat_service().register(email, data.get("password"))
    except Exception as exc:
        return error_response("REGISTER", exc)

    return JsonResponse({
        "message": "User registered successfully!",
        "userRecord": serialize_user_record(user_record),
    }, status=201)


@csrf_exempt
def login(request):
    """
    Check the password against the stored hash and return a custom token.
    """
    logger.info(f"[LOGIN] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = json_body(request)
    if error:
        return error

    email = data.get("email")
    logger.info(f"[LOGIN] email={email}")

    try:
        token = get_chat_service().login(email, data.get("password"))
    except Exception as exc:
        return error_response("LOGIN", exc)

    return JsonResponse({"message": "Login successful!", "token": token})


@csrf_exempt
def logout(request):
    logger.info(f"[LOGOUT] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = json_body(request)
    if error:
        return error

    uid = data.get("uid")

    try:
        get_chat_service().logout(uid)
    except Exception as exc:
        return error_response("LOGOUT", exc)

    logger.info(f"[LOGOUT] {uid} is now offline")
    return JsonResponse({"message": "User logged out and status updated to offline"})
