# forum/views.py
from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Count, F, Q
from drf_spectacular.utils import extend_schema_view, extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from authentication.mixins import OptionalAuthMixin
from core.ordering import SortParamsFilter
from core.serializers import FlagInputSerializer
from core.shortcuts import get_object_or_404
from forum.models import ForumPost, ForumReply
from forum.serializers import ForumPostSerializer, ForumReplySerializer, VoteInputSerializer
import logging

logger = logging.getLogger(__name__)

PINNED_LIMIT = 5


def with_vote_counts(queryset):
    return queryset.select_related("author", "author__profile").annotate(
        upvotes_count=Count("upvotes", distinct=True),
        downvotes_count=Count("downvotes", distinct=True),
    )


@extend_schema_view(
    list=extend_schema(
        description="List forum posts that have not been moderated",
        summary="List Forum Posts",
        tags=["Forum"],
        parameters=[
            OpenApiParameter(name="category", type=OpenApiTypes.STR),
            OpenApiParameter(name="search", type=OpenApiTypes.STR, description="Search in title, description and tags"),
            OpenApiParameter(name="sort_by", type=OpenApiTypes.STR),
            OpenApiParameter(name="sort_order", type=OpenApiTypes.STR, enum=["asc", "desc"]),
        ],
    ),
    create=extend_schema(summary="Create Forum Post", tags=["Forum"]),
    update=extend_schema(summary="Update Forum Post", tags=["Forum"]),
    partial_update=extend_schema(summary="Partially Update Forum Post", tags=["Forum"]),
    destroy=extend_schema(summary="Delete Forum Post", tags=["Forum"]),
)
class ForumPostViewSet(
    OptionalAuthMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """ViewSet for forum posts and their replies"""
    serializer_class = ForumPostSerializer
    filter_backends = [SortParamsFilter]
    sort_fields = {
        "created_at": "created_at",
        "updated_at": "updated_at",
        "views": "views",
        "title": "title",
        "upvotes": "upvotes_count",
    }
    public_actions = ("list", "retrieve", "pinned", "categories")
    page_size = 20

    def get_queryset(self):
        queryset = with_vote_counts(ForumPost.objects.all()).annotate(
            reply_count=Count("replies", distinct=True)
        )
        if self.action in ("list", "pinned"):
            queryset = queryset.filter(is_moderated=False)
        if self.action == "list":
            category = self.request.query_params.get("category")
            if category:
                queryset = queryset.filter(category=category)
            search = self.request.query_params.get("search", "").strip()
            if search:
                queryset = queryset.filter(
                    Q(title__icontains=search)
                    | Q(description__icontains=search)
                    | Q(tags__icontains=search)
                )
        return queryset

    def get_object(self):
        return get_object_or_404(self.get_queryset(), "Post not found", pk=self.kwargs["pk"])

    def _serialize(self, post):
        return ForumPostSerializer(post, context=self.get_serializer_context()).data

    @extend_schema(summary="Get Forum Post", description="Returns the post and its replies, oldest first.", tags=["Forum"])
    def retrieve(self, request, pk=None):
        post = self.get_object()
        ForumPost.objects.filter(pk=post.pk).update(views=F("views") + 1)
        post.views += 1

        replies = with_vote_counts(post.replies.all()).order_by("created_at", "id")
        return Response(
            {
                "post": self._serialize(post),
                "replies": ForumReplySerializer(
                    replies, many=True, context=self.get_serializer_context()
                ).data,
            }
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        post = serializer.save(author=request.user)
        return Response(
            {"message": "Forum post created successfully", "post": self._serialize(post)},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        post = self.get_object()
        if post.author_id != request.user.id:
            return Response(
                {"error": "Not authorized to edit this post"},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = self.get_serializer(post, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        post = serializer.save()
        return Response({"message": "Post updated successfully", "post": self._serialize(post)})

    def destroy(self, request, *args, **kwargs):
        post = self.get_object()
        if post.author_id != request.user.id and not request.user.is_admin:
            return Response(
                {"error": "Not authorized to delete this post"},
                status=status.HTTP_403_FORBIDDEN,
            )

        # Replies cascade with the post.
        post.delete()
        logger.info(f"Forum post {kwargs['pk']} deleted by user {request.user.id}")
        return Response({"message": "Post deleted successfully"})

    @extend_schema(summary="Pinned Posts", tags=["Forum"])
    @action(detail=False, methods=["get"])
    def pinned(self, request):
        posts = self.get_queryset().filter(is_pinned=True).order_by("-created_at")[:PINNED_LIMIT]
        return Response({"posts": ForumPostSerializer(posts, many=True, context=self.get_serializer_context()).data})

    @extend_schema(summary="Forum Categories", tags=["Forum"])
    @action(detail=False, methods=["get"], url_path="categories/list")
    def categories(self, request):
        categories = (
            ForumPost.objects.order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )
        return Response({"categories": list(categories)})

    @extend_schema(summary="Reply to Post", tags=["Forum"], request=ForumReplySerializer)
    @action(detail=True, methods=["post"])
    def reply(self, request, pk=None):
        post = get_object_or_404(ForumPost.objects.all(), "Post not found", pk=pk)
        if post.is_locked:
            return Response(
                {"error": "This post is locked"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = ForumReplySerializer(
            data=request.data, context={**self.get_serializer_context(), "post": post}
        )
        serializer.is_valid(raise_exception=True)
        reply = serializer.save(post=post, author=request.user)
        return Response(
            {
                "message": "Reply added successfully",
                "reply": ForumReplySerializer(reply, context=self.get_serializer_context()).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def _vote(self, request, target):
        serializer = VoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target.cast_vote(request.user, serializer.validated_data["vote_type"])
        return Response({"message": "Vote recorded", **target.vote_counts()})

    @extend_schema(summary="Vote on Post", tags=["Forum"], request=VoteInputSerializer)
    @action(detail=True, methods=["post"])
    def vote(self, request, pk=None):
        """Exclusive up/down vote; repeating a vote withdraws it"""
        post = get_object_or_404(ForumPost.objects.all(), "Post not found", pk=pk)
        return self._vote(request, post)

    @extend_schema(summary="Flag Post", tags=["Forum"], request=FlagInputSerializer)
    @action(detail=True, methods=["post"])
    def flag(self, request, pk=None):
        post = get_object_or_404(ForumPost.objects.all(), "Post not found", pk=pk)
        serializer = FlagInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post.is_flagged = True
        post.flag_reason = serializer.validated_data["reason"]
        post.save(update_fields=["is_flagged", "flag_reason", "updated_at"])
        logger.info(f"Forum post {post.id} flagged as {post.flag_reason}")
        return Response({"message": "Post flagged for moderation"})

    @extend_schema(summary="Vote on Reply", tags=["Forum"], request=VoteInputSerializer)
    @action(detail=False, methods=["post"], url_path=r"replies/(?P<reply_id>[^/.]+)/vote")
    def vote_reply(self, request, reply_id=None):
        reply = get_object_or_404(ForumReply.objects.all(), "Reply not found", pk=reply_id)
        return self._vote(request, reply)

    @extend_schema(summary="Delete Reply", tags=["Forum"])
    @action(detail=False, methods=["delete"], url_path=r"replies/(?P<reply_id>[^/.]+)")
    def delete_reply(self, request, reply_id=None):
        reply = get_object_or_404(ForumReply.objects.all(), "Reply not found", pk=reply_id)
        if reply.author_id != request.user.id and not request.user.is_admin:
            return Response(
                {"error": "Not authorized to delete this reply"},
                status=status.HTTP_403_FORBIDDEN,
            )

        reply.delete()
        return Response({"message": "Reply deleted successfully"})
