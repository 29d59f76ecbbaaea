# adminpanel/views.py
import logging
from datetime import timedelta

from django.apps import apps
from django.contrib.auth import get_user_model
from django.db.models import Avg, Count, Q, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from drf_spectacular.types import OpenApiTypes
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from adminpanel.serializers import (
    MODERATION_ACTIONS,
    FlaggedForumSerializer,
    FlaggedJournalSerializer,
    ModerationActionSerializer,
    RecentUserSerializer,
)
from authentication.permissions import IsAdmin
from core.pagination import PageEnvelopePagination
from core.shortcuts import get_object_or_404
from forum.models import ForumPost
from journal.models import JournalEntry
from mood.models import MoodEntry
from resources.filters import ResourceFilter
from resources.models import Resource
from resources.serializers import ResourceModerationSerializer, ResourceSerializer
from users.filters import UserFilter
from users.serializers import AdminUserUpdateSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

ANALYTICS_PERIODS = {"week": 7, "month": 30, "quarter": 90}

MODERATED_CONTENT = {
    "journal": (JournalEntry, FlaggedJournalSerializer),
    "forum": (ForumPost, FlaggedForumSerializer),
}

DATABASE_APPS = ("users", "resources", "journal", "forum", "messaging", "mood")
REDACTED_FIELDS = {"password"}


class AdminAPIView(APIView):
    permission_classes = [IsAdmin]


class DashboardView(AdminAPIView):
    @extend_schema(summary="Admin Dashboard", tags=["Admin"])
    def get(self, request):
        try:
            user_stats = (
                User.objects.values("role")
                .annotate(
                    count=Count("id"),
                    active_count=Count("id", filter=Q(is_active=True)),
                    verified_count=Count("id", filter=Q(is_verified=True)),
                )
                .order_by("role")
            )

            likes_per_category = dict(
                Resource.likes.through.objects.values("resource__category")
                .annotate(total=Count("id"))
                .values_list("resource__category", "total")
            )
            resource_stats = [
                {**row, "total_likes": likes_per_category.get(row["category"], 0)}
                for row in Resource.objects.values("category")
                .annotate(count=Count("id"), total_views=Sum("views"))
                .order_by("category")
            ]

            journal_stats = (
                JournalEntry.objects.values("mood").annotate(count=Count("id")).order_by("-count", "mood")
            )
            forum_stats = (
                ForumPost.objects.values("category")
                .annotate(count=Count("id"), total_views=Sum("views"))
                .order_by("category")
            )
            recent_users = User.objects.order_by("-created_at")[:5]
            recent_resources = Resource.objects.order_by("-created_at").values(
                "id", "title", "category", "created_at"
            )[:5]

            return Response(
                {
                    "user_stats": list(user_stats),
                    "resource_stats": resource_stats,
                    "journal_stats": list(journal_stats),
                    "forum_stats": list(forum_stats),
                    "recent_users": RecentUserSerializer(recent_users, many=True).data,
                    "recent_resources": list(recent_resources),
                    "flagged_content": {
                        "journals": JournalEntry.objects.filter(is_flagged=True).count(),
                        "forums": ForumPost.objects.filter(is_flagged=True).count(),
                    },
                }
            )
        except Exception as e:
            logger.error(f"Error building admin dashboard: {str(e)}")
            return Response(
                {"error": "Failed to fetch dashboard data"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class FlaggedContentView(AdminAPIView):
    @extend_schema(
        summary="Flagged Content",
        description="Flagged journal entries and forum posts, newest first.",
        tags=["Admin"],
        parameters=[OpenApiParameter(name="type", type=OpenApiTypes.STR, enum=list(MODERATED_CONTENT))],
    )
    def get(self, request):
        content_type = request.query_params.get("type")
        if content_type and content_type not in MODERATED_CONTENT:
            return Response({"error": "Invalid content type"}, status=status.HTTP_400_BAD_REQUEST)

        selected = [content_type] if content_type else list(MODERATED_CONTENT)
        items = []
        for name in selected:
            model, serializer_class = MODERATED_CONTENT[name]
            flagged = model.objects.filter(is_flagged=True).select_related("author")
            items.extend(serializer_class(flagged, many=True).data)
        items.sort(key=lambda item: item["created_at"], reverse=True)

        paginator = PageEnvelopePagination()
        page = paginator.paginate_queryset(items, request, view=self)
        return paginator.get_paginated_response(page)


class ModerationView(AdminAPIView):
    @extend_schema(summary="Moderate Content", tags=["Admin"], request=ModerationActionSerializer)
    def put(self, request, content_type, pk):
        if content_type not in MODERATED_CONTENT:
            return Response({"error": "Invalid content type"}, status=status.HTTP_400_BAD_REQUEST)

        model, serializer_class = MODERATED_CONTENT[content_type]
        item = get_object_or_404(model.objects.select_related("author"), "Content not found", pk=pk)

        serializer = ModerationActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action = serializer.validated_data["action"]
        if action not in MODERATION_ACTIONS:
            return Response({"error": "Invalid action"}, status=status.HTTP_400_BAD_REQUEST)

        if action == "delete":
            item.delete()
            logger.info(f"Admin {request.user.id} deleted {content_type} {pk}")
            return Response({"message": "Content deleted successfully"})

        if action == "approve":
            item.is_flagged = False
            item.flag_reason = None
        item.is_moderated = True
        item.save()
        logger.info(f"Admin {request.user.id} {MODERATION_ACTIONS[action]} {content_type} {pk}")

        return Response(
            {"message": f"Content {MODERATION_ACTIONS[action]} successfully", "item": serializer_class(item).data}
        )


@extend_schema(
    summary="Manage Users",
    tags=["Admin"],
    parameters=[
        OpenApiParameter(name="role", type=OpenApiTypes.STR),
        OpenApiParameter(name="is_active", type=OpenApiTypes.BOOL),
    ],
)
class AdminUserListView(generics.ListAPIView):
    permission_classes = [IsAdmin]
    serializer_class = UserSerializer
    queryset = User.objects.select_related("profile", "preferences").order_by("-created_at", "-id")
    filter_backends = [DjangoFilterBackend]
    filterset_class = UserFilter
    page_size = 20


class AdminUserUpdateView(AdminAPIView):
    @extend_schema(summary="Update User Flags", tags=["Admin"], request=AdminUserUpdateSerializer)
    def put(self, request, pk):
        user = get_object_or_404(User.objects.all(), "User not found", pk=pk)
        serializer = AdminUserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"message": "User updated successfully", "user": UserSerializer(user).data})


@extend_schema(
    summary="Manage Resources",
    tags=["Admin"],
    parameters=[
        OpenApiParameter(name="category", type=OpenApiTypes.STR),
        OpenApiParameter(name="is_published", type=OpenApiTypes.BOOL),
    ],
)
class AdminResourceListView(generics.ListAPIView):
    permission_classes = [IsAdmin]
    serializer_class = ResourceSerializer
    queryset = (
        Resource.objects.select_related("author", "author__profile")
        .annotate(likes_count=Count("likes", distinct=True))
        .order_by("-created_at", "-id")
    )
    filter_backends = [DjangoFilterBackend]
    filterset_class = ResourceFilter
    page_size = 20


class AdminResourceUpdateView(AdminAPIView):
    @extend_schema(summary="Publish or Feature Resource", tags=["Admin"], request=ResourceModerationSerializer)
    def put(self, request, pk):
        resource = get_object_or_404(Resource.objects.all(), "Resource not found", pk=pk)
        serializer = ResourceModerationSerializer(resource, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {"message": "Resource updated successfully", "resource": ResourceSerializer(resource).data}
        )


class AnalyticsView(AdminAPIView):
    @extend_schema(
        summary="Platform Analytics",
        tags=["Admin"],
        parameters=[OpenApiParameter(name="period", type=OpenApiTypes.STR, enum=list(ANALYTICS_PERIODS))],
    )
    def get(self, request):
        period = request.query_params.get("period", "month")
        since = timezone.now() - timedelta(days=ANALYTICS_PERIODS.get(period, 30))
        try:
            user_trends = (
                User.objects.filter(created_at__gte=since)
                .annotate(date=TruncDate("created_at"))
                .values("date")
                .annotate(count=Count("id"))
                .order_by("date")
            )
            resource_views = (
                Resource.objects.filter(created_at__gte=since)
                .annotate(date=TruncDate("created_at"))
                .values("date")
                .annotate(total_views=Sum("views"), count=Count("id"))
                .order_by("date")
            )
            mood_trends = (
                MoodEntry.objects.filter(created_at__gte=since)
                .annotate(date=TruncDate("created_at"))
                .values("date", "mood")
                .annotate(count=Count("id"), avg_intensity=Avg("intensity"))
                .order_by("date", "mood")
            )
            return Response(
                {
                    "user_trends": list(user_trends),
                    "resource_views": list(resource_views),
                    "mood_trends": list(mood_trends),
                    "period": period,
                }
            )
        except Exception as e:
            logger.error(f"Error computing analytics: {str(e)}")
            return Response(
                {"error": "Failed to fetch analytics"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )


class DatabaseView(AdminAPIView):
    """Raw dump of every project table for debugging. Password hashes are never included."""

    @extend_schema(summary="Database Dump", tags=["Admin"])
    def get(self, request):
        data = {}
        for label in DATABASE_APPS:
            for model in apps.get_app_config(label).get_models(include_auto_created=True):
                fields = [
                    field.attname
                    for field in model._meta.concrete_fields
                    if field.name not in REDACTED_FIELDS
                ]
                data[model._meta.db_table] = list(model.objects.values(*fields))

        logger.info(f"Database dump requested by admin {request.user.id}")
        return Response(
            {
                "success": True,
                "message": "Database data retrieved successfully",
                "data": data,
                "collections": list(data),
            }
        )
