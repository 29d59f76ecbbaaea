# messaging/models.py
from django.db import models, transaction
from django.db.models import F
from django.conf import settings
from django.utils import timezone


class ChatType(models.TextChoices):
    STUDENT_COUNSELLOR = "student-counsellor", "Student - Counsellor"
    STUDENT_PEER = "student-peer", "Student - Peer"
    GROUP = "group", "Group"


class MessageType(models.TextChoices):
    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    FILE = "file", "File"
    SYSTEM = "system", "System"


class Chat(models.Model):
    participants = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="ChatParticipant",
        related_name="chats",
    )
    chat_type = models.CharField(max_length=20, choices=ChatType.choices)
    is_active = models.BooleanField(default=True)
    last_message = models.ForeignKey(
        "Message",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    last_message_time = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_message_time"]
        indexes = [
            models.Index(fields=["chat_type", "is_active"], name="chat_type_active_idx"),
        ]

    def __str__(self):
        return f"{self.get_chat_type_display()} chat {self.id}"

    @classmethod
    def find_active(cls, user, other, chat_type):
        """Active chat of ``chat_type`` that both users take part in, if any."""
        return (
            cls.objects.filter(chat_type=chat_type, is_active=True, participants=user)
            .filter(participants=other)
            .first()
        )

    @classmethod
    @transaction.atomic
    def start(cls, chat_type, users):
        chat = cls.objects.create(chat_type=chat_type)
        for user in users:
            ChatParticipant.objects.create(chat=chat, user=user)
        return chat

    def has_participant(self, user):
        return self.memberships.filter(user=user).exists()

    @transaction.atomic
    def record_message(self, message):
        """Make ``message`` the latest one and bump every other participant's unread count."""
        self.last_message = message
        self.last_message_time = message.created_at
        self.save(update_fields=["last_message", "last_message_time", "updated_at"])
        self.memberships.exclude(user=message.sender).update(
            unread_count=F("unread_count") + 1
        )

    @transaction.atomic
    def mark_read(self, user):
        """
        Mark every message from the other participants as read by ``user`` and
        reset their unread counter. Returns the number of messages marked.
        """
        unread = self.messages.filter(is_read=False).exclude(sender=user)
        receipts = [
            MessageRead(message=message, user=user)
            for message in unread.exclude(read_receipts__user=user)
        ]
        MessageRead.objects.bulk_create(receipts, ignore_conflicts=True)
        marked = unread.update(is_read=True)
        self.memberships.filter(user=user).update(unread_count=0)
        return marked


class ChatParticipant(models.Model):
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )
    unread_count = models.PositiveIntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["chat", "user"]

    def __str__(self):
        return f"{self.user} in chat {self.chat_id}"


class Message(models.Model):
    chat = models.ForeignKey(Chat, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    content = models.CharField(max_length=2000)
    message_type = models.CharField(
        max_length=10, choices=MessageType.choices, default=MessageType.TEXT
    )
    media_url = models.URLField(max_length=500, null=True, blank=True)
    is_read = models.BooleanField(default=False)
    is_edited = models.BooleanField(default=False)
    edited_at = models.DateTimeField(null=True, blank=True)
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["chat", "created_at"], name="message_chat_created_idx"),
            models.Index(fields=["sender", "-created_at"], name="message_sender_created_idx"),
        ]

    def __str__(self):
        return f"Message {self.id} from {self.sender}"

    def edit(self, content):
        self.content = content
        self.is_edited = True
        self.edited_at = timezone.now()
        self.save(update_fields=["content", "is_edited", "edited_at", "updated_at"])

    def soft_delete(self):
        self.is_deleted = True
        self.save(update_fields=["is_deleted", "updated_at"])


class MessageRead(models.Model):
    message = models.ForeignKey(Message, on_delete=models.CASCADE, related_name="read_receipts")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="+")
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ["message", "user"]
        ordering = ["read_at"]
