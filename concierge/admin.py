from django.contrib import admin
from .models import ConversationStateRecord, UserStateRecord, ActivityLog

@admin.register(ConversationStateRecord)
class ConversationStateRecordAdmin(admin.ModelAdmin):
    list_display = ('conversation_id', 'channel_id', 'last_activity')
    list_filter = ('channel_id',)
    search_fields = ('conversation_id',)
    readonly_fields = ('created_at', 'last_activity')

@admin.register(UserStateRecord)
class UserStateRecordAdmin(admin.ModelAdmin):
    list_display = ('user_id', 'channel_id', 'last_activity')
    list_filter = ('channel_id',)
    search_fields = ('user_id',)
    readonly_fields = ('created_at', 'last_activity')

@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'processed_successfully')
    list_filter = ('processed_successfully',)
    search_fields = ('error_message',)
