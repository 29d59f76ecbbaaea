# adminpanel/urls.py
from django.urls import path
from adminpanel.views import (
    AdminResourceListView,
    AdminResourceUpdateView,
    AdminUserListView,
    AdminUserUpdateView,
    AnalyticsView,
    DashboardView,
    DatabaseView,
    FlaggedContentView,
    ModerationView,
)

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="admin-dashboard"),
    path("moderation/flagged/", FlaggedContentView.as_view(), name="admin-flagged"),
    path(
        "moderation/<str:content_type>/<str:pk>/",
        ModerationView.as_view(),
        name="admin-moderate",
    ),
    path("users/", AdminUserListView.as_view(), name="admin-users"),
    path("users/<str:pk>/", AdminUserUpdateView.as_view(), name="admin-user-update"),
    path("resources/", AdminResourceListView.as_view(), name="admin-resources"),
    path("resources/<str:pk>/", AdminResourceUpdateView.as_view(), name="admin-resource-update"),
    path("analytics/", AnalyticsView.as_view(), name="admin-analytics"),
    path("database/", DatabaseView.as_view(), name="admin-database"),
]
