# dialogs/main_menu.py

import logging

from ..exceptions import NullArgumentError, UnexpectedResultError
from ..records import ResultKind, UserInfo
from ..services.turn_context import MessageFactory
from .base import END_OF_TURN
from .set_alarm import ALARM_DIALOG, SetAlarmDialog
from .waterfall import WaterfallDialog

logger = logging.getLogger(__name__)

MAIN_DIALOG = 'mainDialog'

RESERVE_TABLE = 'Reserve Table'
WAKE_UP = 'Wake Up'
MENU_OPTIONS = [RESERVE_TABLE, WAKE_UP]


class MainMenuDialog(WaterfallDialog):
    """
    Offers the menu, runs the chosen flow, folds its result into the user's
    record and starts over. It never ends on its own.
    """

    def __init__(self, accessors, dialog_id=MAIN_DIALOG, recognizer=None):
        if accessors is None:
            raise NullArgumentError('accessors')
        super().__init__(dialog_id, [
            self.menu_step,
            self.handle_choice_step,
            self.loop_back_step,
        ])
        self.accessors = accessors
        self.alarm_dialog = SetAlarmDialog(ALARM_DIALOG, accessors, recognizer=recognizer)

    def menu_step(self, step):
        step.context.send_activity(MessageFactory.suggested_actions(MENU_OPTIONS, "How can I help you?"))
        return END_OF_TURN

    def handle_choice_step(self, step):
        choice = (step.result or '').strip().lower()

        if choice == WAKE_UP.lower():
            user_info = self.accessors.user_info.get(step.context, UserInfo)
            return step.begin_dialog(ALARM_DIALOG, user_info)

        # TODO: begin the table reservation flow here once it is built
        logger.info(f"Unrecognised menu choice {step.result!r}")
        step.context.send_activity("Sorry, I don't understand that command. Please choose an option from the list.")
        return step.replace_dialog(self.id)

    def loop_back_step(self, step):
        result = step.result
        if result is not None:
            user_info = self.accessors.user_info.get(step.context, UserInfo)
            kind = getattr(result, 'kind', None)
            if kind == ResultKind.TABLE_INFO:
                user_info.table = result
            elif kind == ResultKind.WAKE_UP_INFO:
                user_info.wake_up = result
            else:
                raise UnexpectedResultError(f"{self.id} cannot handle a '{kind}' result.")
            self.accessors.user_info.set(step.context, user_info)
            logger.info(f"Stored {kind.value} for user {step.context.activity.user_id}")

        return step.replace_dialog(self.id)
