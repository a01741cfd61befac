# dialogs/check_in.py

import logging

from ..records import GuestInfo
from .component import ComponentDialog
from .prompts import PromptOptions, TextPrompt
from .waterfall import WaterfallDialog

logger = logging.getLogger(__name__)

CHECK_IN_DIALOG = 'checkInDialog'
CHECK_IN_WATERFALL = 'checkInWaterfall'
TEXT_PROMPT = 'textPrompt'

GUEST_INFO = 'guest_info'


class CheckInDialog(ComponentDialog):
    """Collects the guest's name and room number and returns a GuestInfo."""

    def __init__(self, dialog_id=CHECK_IN_DIALOG):
        super().__init__(dialog_id)
        self.add_dialog(WaterfallDialog(CHECK_IN_WATERFALL, [
            self.name_step,
            self.room_step,
            self.finish_step,
        ]))
        self.add_dialog(TextPrompt(TEXT_PROMPT))

    def name_step(self, step):
        step.values[GUEST_INFO] = GuestInfo()
        return step.prompt(TEXT_PROMPT, PromptOptions(prompt="What is your name?"))

    def room_step(self, step):
        guest = step.values[GUEST_INFO]
        guest.name = step.result
        return step.prompt(TEXT_PROMPT, PromptOptions(prompt=f"Hi {guest.name}. What room will you be staying in?"))

    def finish_step(self, step):
        guest = step.values[GUEST_INFO]
        guest.room = step.result
        step.context.send_activity("Great, enjoy your stay!")
        logger.info(f"Checked in {guest.name} to room {guest.room}")
        return step.end_dialog(guest)
