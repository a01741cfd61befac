import logging
from dataclasses import dataclass
from typing import Optional

from ..services.datetime_recognizer import DateTimeRecognizer
from ..services.turn_context import ActivityTypes
from .base import END_OF_TURN, Dialog

logger = logging.getLogger(__name__)


@dataclass
class PromptOptions:
    prompt: Optional[str] = None
    retry_prompt: Optional[str] = None

    def to_dict(self):
        return {'prompt': self.prompt, 'retry_prompt': self.retry_prompt}


@dataclass
class PromptRecognizerResult:
    succeeded: bool = False
    value: object = None


class Prompt(Dialog):
    """
    Asks a question and keeps asking until the reply is recognised, then ends
    with the recognised value.
    """
    persisted_options = 'options'
    default_retry_prompt = None

    def begin_dialog(self, dc, options=None):
        if not isinstance(options, PromptOptions):
            raise TypeError(f"{self.__class__.__name__} requires PromptOptions.")

        state = dc.active_dialog.state
        state[self.persisted_options] = options.to_dict()
        self.on_prompt(dc.context, state[self.persisted_options], is_retry=False)
        return END_OF_TURN

    def continue_dialog(self, dc):
        if dc.context.activity.type != ActivityTypes.MESSAGE:
            return END_OF_TURN

        options = dc.active_dialog.state[self.persisted_options]
        recognized = self.on_recognize(dc.context, options)
        if recognized.succeeded:
            return dc.end_dialog(recognized.value)

        self.on_prompt(dc.context, options, is_retry=True)
        return END_OF_TURN

    def resume_dialog(self, dc, reason, result=None):
        self.on_prompt(dc.context, dc.active_dialog.state[self.persisted_options], is_retry=False)
        return END_OF_TURN

    def on_prompt(self, turn_context, options, is_retry):
        text = options.get('prompt')
        if is_retry:
            text = options.get('retry_prompt') or self.default_retry_prompt or text
        if text:
            turn_context.send_activity(text)

    def on_recognize(self, turn_context, options):
        raise NotImplementedError


class TextPrompt(Prompt):
    """Accepts any non-blank reply."""

    def on_recognize(self, turn_context, options):
        text = (turn_context.activity.text or '').strip()
        if text:
            return PromptRecognizerResult(True, text)
        return PromptRecognizerResult()


class DateTimePrompt(Prompt):
    """Ends with the list of DateTimeResolution candidates for the reply."""
    default_retry_prompt = "Sorry, I didn't catch a date or time. Please try again."

    def __init__(self, dialog_id, recognizer=None):
        super().__init__(dialog_id)
        self.recognizer = recognizer or DateTimeRecognizer()

    def on_recognize(self, turn_context, options):
        text = turn_context.activity.text or ''
        candidates = self.recognizer.recognize(text)
        if candidates:
            return PromptRecognizerResult(True, candidates)
        logger.info(f"No date/time recognised in {text!r}")
        return PromptRecognizerResult()
