# peersupport/urls.py
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("api/", include("core.urls")),
    path("", include("frontend.urls")),
]

handler500 = "core.views.server_error"
