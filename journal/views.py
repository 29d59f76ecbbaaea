# journal/views.py
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Count
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from authentication.mixins import OptionalAuthMixin
from core.ordering import SortParamsFilter
from core.shortcuts import get_object_or_404
from journal.models import JournalEntry, JournalReaction
from core.serializers import FlagInputSerializer
from journal.serializers import (
    JournalCommentSerializer,
    JournalEntrySerializer,
    JournalReactionSerializer,
    PublicJournalEntrySerializer,
    PublicJournalReactionSerializer,
    ReactionInputSerializer,
)
import logging

logger = logging.getLogger(__name__)

SORT_PARAMETERS = [
    OpenApiParameter(name="sort_by", type=OpenApiTypes.STR, description="created_at, updated_at or mood"),
    OpenApiParameter(name="sort_order", type=OpenApiTypes.STR, enum=["asc", "desc"]),
]


@extend_schema_view(
    create=extend_schema(summary="Create Journal Entry", tags=["Journal"]),
    retrieve=extend_schema(summary="Get Journal Entry", tags=["Journal"]),
    update=extend_schema(summary="Update Journal Entry", tags=["Journal"]),
    partial_update=extend_schema(summary="Partially Update Journal Entry", tags=["Journal"]),
    destroy=extend_schema(summary="Delete Journal Entry", tags=["Journal"]),
)
class JournalEntryViewSet(
    OptionalAuthMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """ViewSet for the feelings wall and personal journal"""
    serializer_class = JournalEntrySerializer
    filter_backends = [SortParamsFilter]
    sort_fields = {
        "created_at": "created_at",
        "updated_at": "updated_at",
        "mood": "mood",
    }
    public_actions = ("public", "retrieve")
    page_size = 20

    def get_queryset(self):
        queryset = JournalEntry.objects.select_related(
            "author", "author__profile"
        ).prefetch_related("reactions", "comments__user__profile")

        if self.action == "public":
            queryset = queryset.filter(is_public=True, is_moderated=False)
            mood = self.request.query_params.get("mood")
            if mood:
                queryset = queryset.filter(mood=mood)
        elif self.action == "my_entries":
            queryset = queryset.filter(author=self.request.user)
        return queryset

    def get_object(self):
        return get_object_or_404(self.get_queryset(), "Entry not found", pk=self.kwargs["pk"])

    def _can_manage(self, entry):
        return self.request.user.is_authenticated and entry.author_id == self.request.user.id

    def _paginated(self, queryset, serializer_class):
        page = self.paginate_queryset(self.filter_queryset(queryset))
        return self.get_paginated_response(serializer_class(page, many=True).data)

    @extend_schema(
        summary="Feelings Wall",
        description="Public, unmoderated entries. Anonymous entries carry no author.",
        tags=["Journal"],
        parameters=[OpenApiParameter(name="mood", type=OpenApiTypes.STR), *SORT_PARAMETERS],
        responses=PublicJournalEntrySerializer(many=True),
    )
    @action(detail=False, methods=["get"])
    def public(self, request):
        return self._paginated(self.get_queryset(), PublicJournalEntrySerializer)

    @extend_schema(summary="My Journal Entries", tags=["Journal"], parameters=SORT_PARAMETERS)
    @action(detail=False, methods=["get"], url_path="my-entries")
    def my_entries(self, request):
        return self._paginated(self.get_queryset(), JournalEntrySerializer)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save(author=request.user)
        return Response(
            {"message": "Journal entry created successfully", "entry": JournalEntrySerializer(entry).data},
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, *args, **kwargs):
        entry = self.get_object()
        user = request.user
        if self._can_manage(entry) or (user.is_authenticated and user.is_admin):
            return Response({"entry": JournalEntrySerializer(entry).data})
        if entry.is_public and not entry.is_moderated:
            return Response({"entry": PublicJournalEntrySerializer(entry).data})
        return Response({"error": "Entry not found"}, status=status.HTTP_404_NOT_FOUND)

    def update(self, request, *args, **kwargs):
        entry = self.get_object()
        if not self._can_manage(entry):
            return Response(
                {"error": "Not authorized to edit this entry"},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = self.get_serializer(entry, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save()
        return Response(
            {"message": "Entry updated successfully", "entry": JournalEntrySerializer(entry).data}
        )

    def destroy(self, request, *args, **kwargs):
        entry = self.get_object()
        if not self._can_manage(entry):
            return Response(
                {"error": "Not authorized to delete this entry"},
                status=status.HTTP_403_FORBIDDEN,
            )

        entry.delete()
        return Response({"message": "Entry deleted successfully"})

    @extend_schema(summary="React to Entry", tags=["Journal"], request=ReactionInputSerializer)
    @action(detail=True, methods=["post"])
    def react(self, request, pk=None):
        """Toggle the caller's reaction of the given type"""
        entry = self.get_object()
        serializer = ReactionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        added = entry.toggle_reaction(request.user, serializer.validated_data["reaction_type"])
        reaction_serializer = (
            JournalReactionSerializer if entry.author_id == request.user.id else PublicJournalReactionSerializer
        )
        return Response(
            {
                "message": "Reaction added" if added else "Reaction removed",
                "reactions": reaction_serializer(JournalReaction.objects.filter(entry=entry), many=True).data,
            }
        )

    @extend_schema(summary="Comment on Entry", tags=["Journal"], request=JournalCommentSerializer)
    @action(detail=True, methods=["post"])
    def comment(self, request, pk=None):
        entry = self.get_object()
        serializer = JournalCommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = serializer.save(entry=entry, user=request.user)
        return Response(
            {
                "message": "Comment added successfully",
                "comment": JournalCommentSerializer(comment).data,
            }
        )

    @extend_schema(summary="Flag Entry", tags=["Journal"], request=FlagInputSerializer)
    @action(detail=True, methods=["post"])
    def flag(self, request, pk=None):
        """Report an entry to the moderators"""
        entry = self.get_object()
        serializer = FlagInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry.is_flagged = True
        entry.flag_reason = serializer.validated_data["reason"]
        entry.save(update_fields=["is_flagged", "flag_reason", "updated_at"])
        return Response({"message": "Entry flagged for moderation"})

    @extend_schema(summary="Journal Mood Statistics", tags=["Journal"])
    @action(detail=False, methods=["get"], url_path="stats/mood")
    def mood_stats(self, request):
        """Count the caller's entries per mood, most frequent first"""
        try:
            stats = (
                JournalEntry.objects.filter(author=request.user)
                .values("mood")
                .annotate(count=Count("id"))
                .order_by("-count", "mood")
            )
            return Response({"stats": list(stats)})
        except Exception as e:
            logger.error(f"Error computing journal mood statistics: {str(e)}")
            return Response(
                {"error": "Failed to fetch mood statistics"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
