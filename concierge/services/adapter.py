import logging

from django.db import transaction

from ..exceptions import NullArgumentError
from .turn_context import TurnContext

logger = logging.getLogger(__name__)


class BotAdapter:
    """Runs one turn for an inbound activity and hands back the replies."""

    def process_activity(self, activity, logic):
        if activity is None:
            raise NullArgumentError('activity')
        if logic is None:
            raise NullArgumentError('logic')

        turn_context = TurnContext(activity)
        logger.info(f"Turn started: {activity.type} from {activity.user_id} in {activity.conversation_id}")
        try:
            # A failed turn leaves the persisted state as it was
            with transaction.atomic():
                logic(turn_context)
        except Exception:
            logger.error(f"Turn failed in conversation {activity.conversation_id}", exc_info=True)
            raise

        logger.info(f"Turn finished in {activity.conversation_id} with {len(turn_context.responses)} replies")
        return turn_context.responses
