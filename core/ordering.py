# core/ordering.py
from rest_framework.filters import BaseFilterBackend


class SortParamsFilter(BaseFilterBackend):
    """
    Order a queryset by ``sort_by`` / ``sort_order`` query parameters.

    Views declare ``sort_fields`` (query value -> model field) and may set
    ``default_sort``; unknown ``sort_by`` values fall back to the default,
    which is newest first.
    """

    sort_by_param = "sort_by"
    sort_order_param = "sort_order"

    def filter_queryset(self, request, queryset, view):
        sort_fields = getattr(view, "sort_fields", {"created_at": "created_at"})
        default_sort = getattr(view, "default_sort", "created_at")

        sort_by = request.query_params.get(self.sort_by_param, default_sort)
        field = sort_fields.get(sort_by, sort_fields.get(default_sort, "created_at"))

        sort_order = request.query_params.get(self.sort_order_param, "desc").lower()
        prefix = "" if sort_order == "asc" else "-"
        return queryset.order_by(f"{prefix}{field}", f"{prefix}id")
