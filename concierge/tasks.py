import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from .models import ConversationStateRecord

logger = logging.getLogger(__name__)


def delete_inactive_states(days=None):
    """
    Delete conversation state idle for more than ``days`` (default
    ``BOT_STATE_RETENTION_DAYS``). User records are kept.
    """
    if days is None:
        days = settings.BOT_STATE_RETENTION_DAYS
    cutoff = timezone.now() - timedelta(days=days)
    count, _ = ConversationStateRecord.objects.filter(last_activity__lt=cutoff).delete()
    logger.info(f"Deleted {count} conversation states idle since {cutoff:%Y-%m-%d %H:%M}")
    return count


@shared_task
def cleanup_inactive_states(days=None):
    """
    Periodic retention of conversation state, scheduled by celery beat
    """
    count = delete_inactive_states(days)
    return f"Deleted {count} inactive conversation states"
