import logging

from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..chat_service import get_chat_service
from ..http import error_response, json_body

logger = logging.getLogger("api")


@csrf_exempt
def send_message(request):
    """
    Store a message, push a notification to the receiver and bump their counter.
    """
    logger.info(f"[SEND_MESSAGE] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "POST":
        return HttpResponseNotAllowed(["POST"])

    data, error = json_body(request)
    if error:
        return error

    sender_uid = data.get("senderUid")
    receiver_uid = data.get("receiverUid")
    logger.info(f"[SEND_MESSAGE] {sender_uid} -> {receiver_uid}")

    try:
        get_chat_service().send_message(sender_uid, receiver_uid, data.get("message"))
    except Exception as exc:
        return error_response("SEND_MESSAGE", exc)

    return JsonResponse({"message": "Message sent successfully!"})


@csrf_exempt
def get_messages(request):
    """
    Fetch the chat history between two users, oldest first.
    """
    logger.info(f"[GET_MESSAGES] {request.method} from {request.META.get('REMOTE_ADDR')}")

    if request.method != "GET":
        return HttpResponseNotAllowed(["GET"])

    user1_uid = request.GET.get("user1Uid")
    user2_uid = request.GET.get("user2Uid")

    if not user1_uid or not user2_uid:
        return JsonResponse({"error": "Missing required parameters"}, status=400)

    try:
        messages = get_chat_service().get_messages(user1_uid, user2_uid)
    except Exception as exc:
        return error_response("GET_MESSAGES", exc)

    return JsonResponse({"messages": messages})
