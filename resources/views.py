# resources/views.py
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Count, F
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from authentication.mixins import OptionalAuthMixin
from authentication.permissions import IsAdmin, IsCounsellorOrAdmin
from core.ordering import SortParamsFilter
from core.shortcuts import get_object_or_404
from resources.filters import ResourceFilter
from resources.models import Resource
from resources.serializers import ResourceSerializer
import logging

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6


@extend_schema_view(
    list=extend_schema(
        description="List published resources",
        summary="List Resources",
        tags=["Resources"],
        parameters=[
            OpenApiParameter(name="category", type=OpenApiTypes.STR),
            OpenApiParameter(name="type", type=OpenApiTypes.STR, description="article, video, guide, worksheet or meditation"),
            OpenApiParameter(name="difficulty", type=OpenApiTypes.STR),
            OpenApiParameter(name="search", type=OpenApiTypes.STR, description="Search in title, description and tags"),
            OpenApiParameter(name="sort_by", type=OpenApiTypes.STR),
            OpenApiParameter(name="sort_order", type=OpenApiTypes.STR, enum=["asc", "desc"]),
        ],
    ),
    retrieve=extend_schema(summary="Get Resource", tags=["Resources"]),
    create=extend_schema(summary="Create Resource", tags=["Resources"]),
    update=extend_schema(summary="Update Resource", tags=["Resources"]),
    partial_update=extend_schema(summary="Partially Update Resource", tags=["Resources"]),
    destroy=extend_schema(summary="Delete Resource", tags=["Resources"]),
)
class ResourceViewSet(
    OptionalAuthMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """ViewSet for the resource library"""
    serializer_class = ResourceSerializer
    filter_backends = [DjangoFilterBackend, SortParamsFilter]
    filterset_class = ResourceFilter
    sort_fields = {
        "created_at": "created_at",
        "updated_at": "updated_at",
        "title": "title",
        "views": "views",
        "reading_time": "reading_time",
    }
    public_actions = ("list", "retrieve", "featured", "categories")
    page_size = 10

    def get_permissions(self):
        if self.action in ("create", "update", "partial_update"):
            return [IsCounsellorOrAdmin()]
        if self.action == "destroy":
            return [IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = (
            Resource.objects.select_related("author", "author__profile")
            .annotate(likes_count=Count("likes", distinct=True))
        )
        if self.action in ("list", "featured"):
            queryset = queryset.filter(is_published=True)
        return queryset

    def get_object(self):
        return get_object_or_404(
            self.get_queryset(), "Resource not found", pk=self.kwargs["pk"]
        )

    def retrieve(self, request, *args, **kwargs):
        resource = self.get_object()
        if not resource.is_published and not (
            request.user.is_authenticated and request.user.is_admin
        ):
            return Response({"error": "Resource not found"}, status=status.HTTP_404_NOT_FOUND)

        Resource.objects.filter(pk=resource.pk).update(views=F("views") + 1)
        resource.views += 1
        return Response({"resource": self.get_serializer(resource).data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resource = serializer.save(author=request.user)
        logger.info(f"Resource {resource.id} created by user {request.user.id}")
        return Response(
            {
                "message": "Resource created successfully",
                "resource": self.get_serializer(self.get_queryset().get(pk=resource.pk)).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        resource = self.get_object()
        if resource.author_id != request.user.id and not request.user.is_admin:
            return Response(
                {"error": "Not authorized to edit this resource"},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = self.get_serializer(resource, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {"message": "Resource updated successfully", "resource": serializer.data}
        )

    def destroy(self, request, *args, **kwargs):
        resource = self.get_object()
        resource.delete()
        logger.info(f"Resource {kwargs['pk']} deleted by admin {request.user.id}")
        return Response({"message": "Resource deleted successfully"})

    @extend_schema(summary="Featured Resources", tags=["Resources"])
    @action(detail=False, methods=["get"])
    def featured(self, request):
        """Newest published resources marked as featured"""
        resources = self.get_queryset().filter(is_featured=True).order_by("-created_at")[:FEATURED_LIMIT]
        return Response({"resources": self.get_serializer(resources, many=True).data})

    @extend_schema(summary="Resource Categories", tags=["Resources"])
    @action(detail=False, methods=["get"], url_path="categories/list")
    def categories(self, request):
        categories = (
            Resource.objects.order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )
        return Response({"categories": list(categories)})

    @extend_schema(summary="Like Resource", tags=["Resources"], request=None)
    @action(detail=True, methods=["post"])
    def like(self, request, pk=None):
        """Toggle the caller's like on a resource"""
        resource = get_object_or_404(Resource.objects.all(), "Resource not found", pk=pk)
        liked = resource.toggle_like(request.user)
        return Response(
            {
                "message": "Resource liked" if liked else "Resource unliked",
                "likes": resource.likes.count(),
            }
        )
