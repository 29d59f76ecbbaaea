# core/urls.py
from django.urls import path, include, re_path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from core.views import api_not_found

urlpatterns = [
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("auth/", include("authentication.urls")),
    path("users/", include("users.urls")),
    path("resources/", include("resources.urls")),
    path("journal/", include("journal.urls")),
    path("forum/", include("forum.urls")),
    path("chat/", include("messaging.urls")),
    path("mood/", include("mood.urls")),
    path("admin/", include("adminpanel.urls")),
    re_path(r"^.*$", api_not_found, name="api-not-found"),
]
