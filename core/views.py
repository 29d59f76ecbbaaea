# core/views.py
from django.http import JsonResponse

from core.exceptions import GENERIC_ERROR_MESSAGE


def api_not_found(request, *args, **kwargs):
    return JsonResponse({"error": "API route not found"}, status=404)


def server_error(request, *args, **kwargs):
    return JsonResponse({"error": GENERIC_ERROR_MESSAGE}, status=500)
