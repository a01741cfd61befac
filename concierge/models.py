from django.db import models


class ConversationStateRecord(models.Model):
    """Conversation-scoped bot state: the dialog stack and per-conversation properties."""
    channel_id = models.CharField(max_length=50)
    conversation_id = models.CharField(max_length=255)
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_activity = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['channel_id', 'conversation_id']
        indexes = [
            models.Index(fields=['last_activity'], name='concierge_state_activity_idx'),
        ]

    def __str__(self):
        return f"Conversation state {self.channel_id}/{self.conversation_id}"


class UserStateRecord(models.Model):
    """User-scoped bot state, e.g. the UserInfo record."""
    channel_id = models.CharField(max_length=50)
    user_id = models.CharField(max_length=255)
    data = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_activity = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ['channel_id', 'user_id']

    def __str__(self):
        return f"User state {self.channel_id}/{self.user_id}"


class ActivityLog(models.Model):
    timestamp = models.DateTimeField(auto_now_add=True)
    payload = models.JSONField(null=True, blank=True)
    processed_successfully = models.BooleanField(default=False)
    error_message = models.TextField(blank=True)

    def __str__(self):
        return f"Activity log {self.timestamp}"
