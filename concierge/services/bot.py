"""
Per-activity entry point: resume the flow in progress, or start check-in or
the main menu, then persist both stores.
"""
import logging
from functools import lru_cache

from ..dialogs import (
    CHECK_IN_DIALOG,
    MAIN_DIALOG,
    CheckInDialog,
    DialogSet,
    DialogTurnStatus,
    MainMenuDialog,
)
from ..exceptions import NullArgumentError
from ..records import ResultKind, UserInfo
from .accessors import ConciergeAccessors
from .state import ConversationState, UserState
from .turn_context import ActivityTypes

logger = logging.getLogger(__name__)


class ConciergeBot:
    def __init__(self, conversation_state, user_state, recognizer=None):
        if conversation_state is None:
            raise NullArgumentError('conversation_state')
        if user_state is None:
            raise NullArgumentError('user_state')

        self.accessors = ConciergeAccessors(conversation_state, user_state)

        main_menu = MainMenuDialog(self.accessors, recognizer=recognizer)
        self.dialogs = DialogSet(self.accessors.dialog_state)
        self.dialogs.add(CheckInDialog(CHECK_IN_DIALOG))
        self.dialogs.add(main_menu)
        self.dialogs.add(main_menu.alarm_dialog)

    def on_turn(self, turn_context):
        if turn_context is None:
            raise NullArgumentError('turn_context')
        activity = turn_context.activity

        if activity.type != ActivityTypes.MESSAGE:
            turn_context.send_activity(f"{activity.type} event detected")
            return

        dc = self.dialogs.create_context(turn_context)
        user_info = self.accessors.user_info.get(turn_context, UserInfo)

        turn_result = dc.continue_dialog()
        logger.debug(f"Conversation {activity.conversation_id}: {turn_result}")

        if turn_result.status == DialogTurnStatus.COMPLETE:
            result = turn_result.result
            if getattr(result, 'kind', None) == ResultKind.GUEST_INFO:
                user_info.guest = result
                self.accessors.user_info.set(turn_context, user_info)
                dc.begin_dialog(MAIN_DIALOG)
            else:
                logger.warning(f"Ignoring unexpected result from a top-level flow: {result!r}")

        elif turn_result.status == DialogTurnStatus.EMPTY and not turn_context.responded:
            if user_info.guest_name:
                dc.begin_dialog(MAIN_DIALOG)
            else:
                dc.begin_dialog(CHECK_IN_DIALOG)

        self.accessors.save_changes(turn_context)


@lru_cache(maxsize=1)
def get_bot():
    """The bot shared by the HTTP and WebSocket transports."""
    return ConciergeBot(ConversationState(), UserState())
