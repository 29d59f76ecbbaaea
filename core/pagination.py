# core/pagination.py
import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PageEnvelopePagination(PageNumberPagination):
    """
    Offset pagination rendered as ``items`` / ``total_pages`` / ``current_page`` / ``total``.

    ``limit`` selects the page size. Views may set a ``page_size`` attribute to
    change the default. A page past the end yields an empty ``items`` list
    rather than a 404.
    """

    page_size = 20
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = 100

    def get_page_size(self, request):
        default = self.view_page_size or self.page_size
        try:
            size = int(request.query_params[self.page_size_query_param])
        except (KeyError, ValueError):
            return default
        if size <= 0:
            return default
        return min(size, self.max_page_size)

    def get_page_number(self, request, paginator=None):
        try:
            number = int(request.query_params.get(self.page_query_param, 1))
        except (TypeError, ValueError):
            number = 1
        return max(number, 1)

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.view_page_size = getattr(view, "page_size", None)
        self.limit = self.get_page_size(request)
        self.current_page = self.get_page_number(request)
        self.total = len(queryset) if isinstance(queryset, list) else queryset.count()

        offset = (self.current_page - 1) * self.limit
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "items": data,
                "total_pages": math.ceil(self.total / self.limit) if self.limit else 0,
                "current_page": self.current_page,
                "total": self.total,
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "items": schema,
                "total_pages": {"type": "integer"},
                "current_page": {"type": "integer"},
                "total": {"type": "integer"},
            },
        }
