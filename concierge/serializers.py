from django.conf import settings
from rest_framework import serializers

from .services.turn_context import Activity, ActivityTypes


class ActivitySerializer(serializers.Serializer):
    """Inbound activity posted by a channel."""
    type = serializers.CharField(max_length=50, default=ActivityTypes.MESSAGE)
    text = serializers.CharField(allow_blank=True, allow_null=True, default='', trim_whitespace=False)
    channel_id = serializers.CharField(max_length=50, required=False, allow_blank=True)
    conversation_id = serializers.CharField(max_length=255)
    user_id = serializers.CharField(max_length=255)
    user_name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    id = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)

    def validate_channel_id(self, value):
        return value or settings.BOT_DEFAULT_CHANNEL

    def validate(self, attrs):
        attrs.setdefault('channel_id', settings.BOT_DEFAULT_CHANNEL)
        if attrs['type'] == ActivityTypes.MESSAGE and attrs.get('text') is None:
            attrs['text'] = ''
        return attrs

    def create(self, validated_data):
        return Activity(**validated_data)
