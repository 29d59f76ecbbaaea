# core/exceptions.py
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"
MISSING_TOKEN_MESSAGE = "Access denied. No token provided."


class ConflictError(APIException):
    """
    Raised when a create would duplicate a per-user unique record.

    The existing record is echoed back so clients can show it instead.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."
    default_code = "conflict"

    def __init__(self, detail=None, existing=None):
        super().__init__(detail)
        self.existing = existing


def _first_message(detail):
    """Flatten DRF error details down to one human readable message."""
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _first_message(detail["detail"])
        if "non_field_errors" in detail:
            return _first_message(detail["non_field_errors"])
        for field, value in detail.items():
            return f"{field}: {_first_message(value)}"
        return ""
    return str(detail)


def json_exception_handler(exc, context):
    """
    Render every API failure as ``{"error": message}``.

    Validation failures also carry the per-field ``details``; anything that is
    not an ``APIException`` is logged with its traceback and reported as a
    generic 500 so stack traces never reach the client.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()
    elif isinstance(exc, exceptions.NotAuthenticated):
        exc = exceptions.NotAuthenticated(MISSING_TOKEN_MESSAGE)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {str(exc)}",
            exc_info=exc,
        )
        return Response(
            {"error": GENERIC_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = {"error": _first_message(response.data)}
    if isinstance(exc, exceptions.ValidationError) and isinstance(response.data, dict):
        data["details"] = response.data
    if isinstance(exc, ConflictError) and exc.existing is not None:
        data["entry"] = exc.existing

    response.data = data
    return response
