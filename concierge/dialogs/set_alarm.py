# dialogs/set_alarm.py

import logging

from ..exceptions import NoResolutionError, NullArgumentError
from ..records import GuestInfo, UserInfo, WakeUpInfo
from .component import ComponentDialog
from .prompts import DateTimePrompt, PromptOptions
from .waterfall import WaterfallDialog

logger = logging.getLogger(__name__)

ALARM_DIALOG = 'alarmDialog'
ALARM_WATERFALL = 'alarmWaterfall'
DATETIME_PROMPT = 'dateTimePrompt'

MARKER = 'marker'
MARKER_VALUE = '***hello***'


def _guest_from_options(options):
    """The alarm can be started with either the whole UserInfo or just the GuestInfo."""
    if isinstance(options, UserInfo):
        return options.guest
    if isinstance(options, GuestInfo):
        return options
    return None


class SetAlarmDialog(ComponentDialog):
    """
    Asks when the guest wants to be woken up and returns a WakeUpInfo.

    The first date/time candidate wins: its point value if it has one,
    otherwise the start of its range.
    """

    def __init__(self, dialog_id=ALARM_DIALOG, accessors=None, recognizer=None):
        super().__init__(dialog_id)
        if accessors is None:
            raise NullArgumentError('accessors')
        self.accessors = accessors

        self.add_dialog(WaterfallDialog(ALARM_WATERFALL, [
            self.ask_time_step,
            self.confirm_step,
        ]))
        self.add_dialog(DateTimePrompt(DATETIME_PROMPT, recognizer=recognizer))

    def ask_time_step(self, step):
        guest = _guest_from_options(step.options)
        greeting = f"Hi {guest.name}" if guest and guest.name else "Hi"

        step.values[MARKER] = MARKER_VALUE
        self.accessors.alarm_specific_dialog_state.set(step.context, {MARKER: MARKER_VALUE})

        return step.prompt(DATETIME_PROMPT, PromptOptions(
            prompt=f"{greeting}. When would you like your alarm set for?",
            retry_prompt="Sorry, I didn't catch a date or time. When would you like your alarm set for?",
        ))

    def confirm_step(self, step):
        candidates = step.result
        if not candidates:
            raise NoResolutionError("No date/time candidates were recognised for the alarm.")

        alarm_time = candidates[0].resolved
        if not alarm_time:
            raise NoResolutionError("The first date/time candidate has neither a value nor a start.")

        persisted = self.accessors.alarm_specific_dialog_state.get(step.context) or {}
        logger.debug(f"Alarm marker: scratch={step.values.get(MARKER)!r} persisted={persisted.get(MARKER)!r}")

        guest = _guest_from_options(step.options)
        if guest and guest.room:
            message = f"Your alarm is set to {alarm_time} for room {guest.room}."
        else:
            message = f"Your alarm is set to {alarm_time}."
        step.context.send_activity(message)
        logger.info(f"Alarm set to {alarm_time} for room {guest.room if guest else None}")

        return step.end_dialog(WakeUpInfo(time=alarm_time))
