# resources/filters.py
import django_filters
from django.db.models import Q

from resources.models import Resource


class ResourceFilter(django_filters.FilterSet):
    """Query filters shared by the public library and the admin listing."""

    category = django_filters.CharFilter(field_name="category")
    type = django_filters.CharFilter(field_name="resource_type")
    difficulty = django_filters.CharFilter(field_name="difficulty")
    is_published = django_filters.BooleanFilter(field_name="is_published")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Resource
        fields = ["category", "type", "difficulty", "is_published"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value)
            | Q(description__icontains=value)
            | Q(tags__icontains=value)
        )
