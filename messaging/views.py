# messaging/views.py
import logging

from django.contrib.auth import get_user_model
from django.db.models import Max, Q, Prefetch
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.shortcuts import get_object_or_404
from messaging.models import Chat, Message
from messaging.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    MessageCreateSerializer,
    MessageEditSerializer,
    MessageSerializer,
)
from users.serializers import CounsellorSerializer
from users.views import available_counsellors

logger = logging.getLogger(__name__)

User = get_user_model()


@extend_schema_view(
    list=extend_schema(
        description="List the active chats of the authenticated user, most recent activity first, with the caller's unread counter.",
        summary="List Chats",
        tags=["Chat"],
    ),
    retrieve=extend_schema(
        description="Retrieve a chat with its messages, oldest first. Messages from the other participants are marked as read.",
        summary="Retrieve Chat",
        tags=["Chat"],
    ),
    create=extend_schema(
        description="Start a chat with a counsellor or peer. An existing active chat between the same pair and type is returned instead.",
        summary="Create Chat",
        tags=["Chat"],
        request=ChatCreateSerializer,
    ),
)
class ChatViewSet(viewsets.GenericViewSet):
    serializer_class = ChatSerializer
    pagination_class = None

    def get_queryset(self):
        user = self.request.user
        return (
            Chat.objects.filter(participants=user)
            .select_related("last_message__sender__profile")
            .prefetch_related("participants__profile")
            .annotate(
                caller_unread_count=Max(
                    "memberships__unread_count", filter=Q(memberships__user=user)
                )
            )
        )

    def get_chat(self, pk, message):
        chat = get_object_or_404(Chat.objects.all(), "Chat not found", pk=pk)
        if not chat.has_participant(self.request.user):
            return chat, Response({"error": message}, status=status.HTTP_403_FORBIDDEN)
        return chat, None

    def list(self, request):
        chats = self.get_queryset().filter(is_active=True).order_by("-last_message_time")
        return Response({"chats": self.get_serializer(chats, many=True).data})

    def retrieve(self, request, pk=None):
        chat, denied = self.get_chat(pk, "Not authorized to access this chat")
        if denied:
            return denied

        chat.mark_read(request.user)
        messages = (
            chat.messages.filter(is_deleted=False)
            .select_related("sender__profile")
            .prefetch_related("read_receipts")
            .order_by("created_at", "id")
        )
        chat = self.get_queryset().get(pk=chat.pk)
        return Response(
            {
                "chat": self.get_serializer(chat).data,
                "messages": MessageSerializer(messages, many=True).data,
            }
        )

    def create(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target_id = serializer.validated_data["target_id"]
        chat_type = serializer.validated_data["chat_type"]

        participant = User.objects.filter(pk=target_id).first()
        if participant is None:
            return Response({"error": "Participant not found"}, status=status.HTTP_404_NOT_FOUND)
        if participant.pk == request.user.pk:
            return Response(
                {"error": "Cannot start a chat with yourself"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        existing = Chat.find_active(request.user, participant, chat_type)
        if existing:
            return Response(
                {
                    "success": True,
                    "message": "Chat already exists",
                    "chat": self.get_serializer(self.get_queryset().get(pk=existing.pk)).data,
                }
            )

        chat = Chat.start(chat_type, [request.user, participant])
        logger.info(f"Chat {chat.id} started between users {request.user.id} and {participant.id}")
        return Response(
            {
                "success": True,
                "message": "Chat created successfully",
                "chat": self.get_serializer(self.get_queryset().get(pk=chat.pk)).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Send Message", tags=["Chat"], request=MessageCreateSerializer, responses=MessageSerializer)
    @action(detail=True, methods=["post"], url_path="messages")
    def send_message(self, request, pk=None):
        chat, denied = self.get_chat(pk, "Not authorized to send message in this chat")
        if denied:
            return denied

        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = serializer.save(chat=chat, sender=request.user)
        chat.record_message(message)

        return Response(
            {"message": "Message sent successfully", "data": MessageSerializer(message).data},
            status=status.HTTP_201_CREATED,
        )

    def get_own_message(self, message_id, verb):
        message = get_object_or_404(
            Message.objects.select_related("sender__profile"), "Message not found", pk=message_id
        )
        if message.sender_id != self.request.user.id:
            return message, Response(
                {"error": f"Not authorized to {verb} this message"},
                status=status.HTTP_403_FORBIDDEN,
            )
        return message, None

    @extend_schema(summary="Edit Message", tags=["Chat"], request=MessageEditSerializer, responses=MessageSerializer)
    @action(detail=False, methods=["put"], url_path=r"messages/(?P<message_id>[^/.]+)")
    def message_detail(self, request, message_id=None):
        message, denied = self.get_own_message(message_id, "edit")
        if denied:
            return denied

        serializer = MessageEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message.edit(serializer.validated_data["content"])
        return Response(
            {"message": "Message updated successfully", "data": MessageSerializer(message).data}
        )

    @extend_schema(summary="Delete Message", tags=["Chat"])
    @message_detail.mapping.delete
    def delete_message(self, request, message_id=None):
        message, denied = self.get_own_message(message_id, "delete")
        if denied:
            return denied

        message.soft_delete()
        return Response({"message": "Message deleted successfully"})

    @extend_schema(summary="Unread Message Count", tags=["Chat"])
    @action(detail=False, methods=["get"], url_path="unread/count")
    def unread_count(self, request):
        count = (
            Message.objects.filter(
                chat__memberships__user=request.user, is_read=False, is_deleted=False
            )
            .exclude(sender=request.user)
            .count()
        )
        return Response({"unread_count": count})

    @extend_schema(summary="Mark Chat as Read", tags=["Chat"], request=None)
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        chat, denied = self.get_chat(pk, "Not authorized to access this chat")
        if denied:
            return denied

        chat.mark_read(request.user)
        return Response({"message": "Chat marked as read"})

    @extend_schema(summary="Available Counsellors", tags=["Chat"], responses=CounsellorSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="counsellors/available")
    def counsellors_available(self, request):
        return Response(
            {"counsellors": CounsellorSerializer(available_counsellors(), many=True).data}
        )
