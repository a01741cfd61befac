"""
Activities exchanged with a channel, and the context object for one turn.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import NullArgumentError

logger = logging.getLogger(__name__)


class ActivityTypes:
    MESSAGE = 'message'
    CONVERSATION_UPDATE = 'conversationUpdate'
    TYPING = 'typing'
    EVENT = 'event'


@dataclass
class Activity:
    type: str = ActivityTypes.MESSAGE
    text: Optional[str] = None
    channel_id: Optional[str] = None
    conversation_id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    id: Optional[str] = None
    suggested_actions: List[str] = field(default_factory=list)

    def to_dict(self):
        """Outbound wire format."""
        data = {'type': self.type, 'text': self.text}
        if self.suggested_actions:
            data['suggested_actions'] = [
                {'type': 'imBack', 'title': action, 'value': action}
                for action in self.suggested_actions
            ]
        return data


class MessageFactory:
    @staticmethod
    def text(text):
        return Activity(type=ActivityTypes.MESSAGE, text=text)

    @staticmethod
    def suggested_actions(actions, text=None):
        return Activity(type=ActivityTypes.MESSAGE, text=text, suggested_actions=list(actions))


class TurnContext:
    """
    Everything the bot needs while handling one inbound activity.

    Replies are buffered in ``responses`` and handed back to the transport by
    the adapter once the turn has completed. ``turn_state`` is scratch space
    for this turn only, used by the state stores to cache what they loaded.
    """

    def __init__(self, activity):
        if activity is None:
            raise NullArgumentError('activity')
        self.activity = activity
        self.turn_state = {}
        self.responses = []

    @property
    def responded(self):
        return bool(self.responses)

    def send_activity(self, activity_or_text):
        if isinstance(activity_or_text, str):
            activity = MessageFactory.text(activity_or_text)
        else:
            activity = activity_or_text

        activity.channel_id = self.activity.channel_id
        activity.conversation_id = self.activity.conversation_id
        activity.user_id = self.activity.user_id
        self.responses.append(activity)
        logger.debug(f"Queued reply for conversation {self.activity.conversation_id}: {activity.text}")
        return activity
