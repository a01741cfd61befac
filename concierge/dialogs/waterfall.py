import logging

from ..services.turn_context import ActivityTypes
from .base import END_OF_TURN, Dialog, DialogContext, DialogReason

logger = logging.getLogger(__name__)


class WaterfallStepContext(DialogContext):
    """
    DialogContext handed to each waterfall step.

    ``values`` is scratch space that lives as long as the waterfall instance;
    ``result`` is whatever the previous step (or the dialog it started)
    returned.
    """

    def __init__(self, waterfall, dc, options, values, index, reason, result):
        super().__init__(dc.dialogs, dc.context, dc.state, parent=dc.parent)
        self._waterfall = waterfall
        self._next_called = False
        self.options = options
        self.values = values
        self.index = index
        self.reason = reason
        self.result = result

    def next(self, result=None):
        """Skip straight to the following step with ``result``."""
        if self._next_called:
            raise RuntimeError(f"next() called more than once in step {self.index} of '{self._waterfall.id}'.")
        self._next_called = True
        return self._waterfall.resume_dialog(self, DialogReason.NEXT_CALLED, result)


class WaterfallDialog(Dialog):
    """Runs its steps in order, one step per resume; the step index survives between turns."""

    def __init__(self, dialog_id, steps=None):
        super().__init__(dialog_id)
        self._steps = list(steps or [])

    def add_step(self, step):
        self._steps.append(step)
        return self

    def begin_dialog(self, dc, options=None):
        state = dc.active_dialog.state
        state['options'] = options
        state['values'] = {}
        return self._run_step(dc, 0, DialogReason.BEGIN_CALLED, None)

    def continue_dialog(self, dc):
        if dc.context.activity.type != ActivityTypes.MESSAGE:
            return END_OF_TURN
        return self.resume_dialog(dc, DialogReason.CONTINUE_CALLED, dc.context.activity.text)

    def resume_dialog(self, dc, reason, result=None):
        index = dc.active_dialog.state['step_index']
        return self._run_step(dc, index + 1, reason, result)

    def _run_step(self, dc, index, reason, result):
        if index >= len(self._steps):
            return dc.end_dialog(result)

        state = dc.active_dialog.state
        state['step_index'] = index
        step = self._steps[index]
        logger.debug(f"{self.id}: step {index} ({getattr(step, '__name__', step)})")
        step_context = WaterfallStepContext(self, dc, state['options'], state['values'], index, reason, result)
        return step(step_context)
