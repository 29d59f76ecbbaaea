# users/views.py
import logging

from django.contrib.auth import get_user_model
from django.db.models import Count, Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from drf_spectacular.types import OpenApiTypes
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.mixins import OptionalAuthMixin
from authentication.permissions import IsAdmin
from core.shortcuts import get_object_or_404
from users.filters import UserFilter
from users.models import Role
from users.serializers import (
    AdminUserUpdateSerializer,
    CounsellorSerializer,
    PublicUserSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


def available_counsellors():
    """Active, verified counsellors ordered by first name."""
    return (
        User.objects.filter(role=Role.COUNSELLOR, is_active=True, is_verified=True)
        .select_related("profile")
        .order_by("first_name", "id")
    )


@extend_schema_view(
    list=extend_schema(
        summary="List Users",
        tags=["Users"],
        parameters=[
            OpenApiParameter(name="role", type=OpenApiTypes.STR, description="student, counsellor or admin"),
            OpenApiParameter(name="is_active", type=OpenApiTypes.BOOL),
        ],
    ),
    retrieve=extend_schema(
        summary="Get User",
        description="Full record for the caller or an admin, a limited profile otherwise.",
        tags=["Users"],
    ),
    update=extend_schema(summary="Update User", tags=["Users"], request=AdminUserUpdateSerializer),
    destroy=extend_schema(summary="Delete User", tags=["Users"]),
)
class UserViewSet(
    OptionalAuthMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = User.objects.select_related("profile", "preferences").order_by("-created_at")
    serializer_class = UserSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = UserFilter
    public_actions = ("counsellors",)
    page_size = 20

    def get_permissions(self):
        if self.action in ("list", "update", "destroy", "stats_overview"):
            return [IsAdmin()]
        return super().get_permissions()

    def get_object(self):
        return get_object_or_404(self.queryset, "User not found", pk=self.kwargs["pk"])

    def retrieve(self, request, *args, **kwargs):
        user = self.get_object()
        if request.user.is_admin or request.user.pk == user.pk:
            return Response({"user": UserSerializer(user).data})
        return Response({"user": PublicUserSerializer(user).data})

    def update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = AdminUserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(
            {"message": "User updated successfully", "user": UserSerializer(user).data}
        )

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        logger.info(f"Admin {request.user.id} deleted user {user.id}")
        user.delete()
        return Response({"message": "User deleted successfully"})

    @extend_schema(summary="Available Counsellors", tags=["Users"], responses=CounsellorSerializer(many=True))
    @action(detail=False, methods=["get"], pagination_class=None, filter_backends=[])
    def counsellors(self, request):
        counsellors = available_counsellors()
        return Response({"counsellors": CounsellorSerializer(counsellors, many=True).data})

    @extend_schema(summary="User Statistics", tags=["Users"])
    @action(detail=False, methods=["get"], url_path="stats/overview", filter_backends=[])
    def stats_overview(self, request):
        try:
            by_role = (
                User.objects.values("role")
                .annotate(
                    count=Count("id"),
                    active=Count("id", filter=Q(is_active=True)),
                    verified=Count("id", filter=Q(is_verified=True)),
                )
                .order_by("role")
            )
            return Response(
                {
                    "role_stats": list(by_role),
                    "total_users": User.objects.count(),
                    "active_users": User.objects.filter(is_active=True).count(),
                }
            )
        except Exception as e:
            logger.error(f"Error computing user statistics: {str(e)}")
            return Response(
                {"error": "Something went wrong!"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
