from django.core.exceptions import ImproperlyConfigured
from django.http import JsonResponse, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from ..chat_service import get_chat_service


@csrf_exempt
def health(request):
    if request.method != "GET":
        return HttpResponseNotAllowed(["GET"])

    try:
        firestore_ok = get_chat_service().check_connection()
    except ImproperlyConfigured:
        firestore_ok = False

    return JsonResponse({
        "status": "ok",
        "firestore": "connected" if firestore_ok else "not_configured",
    })
