# users/filters.py
import django_filters
from django.contrib.auth import get_user_model

from users.models import Role

User = get_user_model()


class UserFilter(django_filters.FilterSet):
    role = django_filters.ChoiceFilter(choices=Role.choices)
    is_active = django_filters.BooleanFilter()
    is_verified = django_filters.BooleanFilter()

    class Meta:
        model = User
        fields = ["role", "is_active", "is_verified"]
