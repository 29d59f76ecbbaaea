# core/shortcuts.py
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import NotFound


def get_object_or_404(queryset, message="Not found.", **lookup):
    """
    Like ``django.shortcuts.get_object_or_404`` but raises a DRF ``NotFound``
    carrying ``message``. Malformed ids are treated as missing.
    """
    try:
        return queryset.get(**lookup)
    except (queryset.model.DoesNotExist, ValueError, TypeError, DjangoValidationError):
        raise NotFound(message)
