"""
Dialog stack runtime.

A conversation's progress is an explicit stack of ``DialogInstance`` entries
kept in the conversation store. The top of the stack is the end of the list.
Dialogs push (``begin_dialog``), replace (``replace_dialog``) and pop
(``end_dialog``) through a ``DialogContext``; every operation returns a
``DialogTurnResult`` so callers branch on an explicit status.
"""
import logging
from enum import Enum

from ..exceptions import DialogNotFoundError, NullArgumentError
from ..serialization import KIND_KEY, decode, encode, register

logger = logging.getLogger(__name__)


class DialogTurnStatus(Enum):
    EMPTY = 'empty'
    WAITING = 'waiting'
    COMPLETE = 'complete'
    CANCELLED = 'cancelled'


class DialogReason(Enum):
    BEGIN_CALLED = 'beginCalled'
    CONTINUE_CALLED = 'continueCalled'
    END_CALLED = 'endCalled'
    REPLACE_CALLED = 'replaceCalled'
    CANCEL_CALLED = 'cancelCalled'
    NEXT_CALLED = 'nextCalled'


class DialogTurnResult:
    def __init__(self, status, result=None):
        self.status = status
        self.result = result

    def __repr__(self):
        return f"DialogTurnResult(status={self.status.name}, result={self.result!r})"


END_OF_TURN = DialogTurnResult(DialogTurnStatus.WAITING)


@register
class DialogInstance:
    kind = 'dialog_instance'

    def __init__(self, dialog_id, state=None):
        self.id = dialog_id
        self.state = state if state is not None else {}

    def to_dict(self):
        return {KIND_KEY: self.kind, 'id': self.id, 'state': encode(self.state)}

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], decode(data.get('state') or {}))

    def __repr__(self):
        return f"DialogInstance(id={self.id!r})"


@register
class DialogState:
    kind = 'dialog_state'

    def __init__(self, dialog_stack=None):
        self.dialog_stack = list(dialog_stack) if dialog_stack else []

    def to_dict(self):
        return {KIND_KEY: self.kind, 'dialog_stack': [instance.to_dict() for instance in self.dialog_stack]}

    @classmethod
    def from_dict(cls, data):
        return cls([decode(item) for item in data.get('dialog_stack') or []])


class Dialog:
    """
    Base class for anything that can sit on the dialog stack.

    Subclasses implement ``begin_dialog``; the defaults for the other hooks end
    the dialog, passing through whatever result they were given.
    """

    def __init__(self, dialog_id):
        if not dialog_id:
            raise ValueError("A dialog id is required.")
        self.id = dialog_id

    def begin_dialog(self, dc, options=None):
        raise NotImplementedError

    def continue_dialog(self, dc):
        return dc.end_dialog(None)

    def resume_dialog(self, dc, reason, result=None):
        """Called when a dialog this one started has ended."""
        return dc.end_dialog(result)

    def end_dialog(self, turn_context, instance, reason):
        """Called just before the instance is popped from the stack."""


class DialogSet:
    def __init__(self, dialog_state_accessor=None):
        self._dialog_state = dialog_state_accessor
        self._dialogs = {}

    def add(self, dialog):
        if dialog.id in self._dialogs:
            raise ValueError(f"A dialog with id '{dialog.id}' has already been added.")
        self._dialogs[dialog.id] = dialog
        return self

    def find(self, dialog_id):
        return self._dialogs.get(dialog_id)

    def create_context(self, turn_context):
        if turn_context is None:
            raise NullArgumentError('turn_context')
        if self._dialog_state is None:
            raise RuntimeError("This DialogSet was created without a dialog state accessor.")
        state = self._dialog_state.get(turn_context, DialogState)
        return DialogContext(self, turn_context, state)


class DialogContext:
    """
    Operations on one dialog stack for the current turn.

    ``parent`` is set for the inner context of a component dialog, so
    ``find_dialog`` can fall back to the dialogs of the enclosing set.
    """

    def __init__(self, dialogs, turn_context, state, parent=None):
        self.dialogs = dialogs
        self.context = turn_context
        self.state = state
        self.parent = parent

    @property
    def stack(self):
        return self.state.dialog_stack

    @property
    def active_dialog(self):
        return self.stack[-1] if self.stack else None

    def find_dialog(self, dialog_id):
        dialog = self.dialogs.find(dialog_id)
        if dialog is None and self.parent is not None:
            dialog = self.parent.find_dialog(dialog_id)
        return dialog

    def begin_dialog(self, dialog_id, options=None):
        if not dialog_id:
            raise ValueError("A dialog id is required.")
        dialog = self._get_dialog(dialog_id)

        self.stack.append(DialogInstance(dialog_id))
        logger.debug(f"Pushed '{dialog_id}' (depth {len(self.stack)})")
        return dialog.begin_dialog(self, options)

    def prompt(self, dialog_id, options):
        if options is None:
            raise NullArgumentError('options')
        return self.begin_dialog(dialog_id, options)

    def continue_dialog(self):
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        return self._get_dialog(instance.id).continue_dialog(self)

    def end_dialog(self, result=None):
        self._end_active_dialog(DialogReason.END_CALLED)

        instance = self.active_dialog
        if instance is not None:
            return self._get_dialog(instance.id).resume_dialog(self, DialogReason.END_CALLED, result)
        return DialogTurnResult(DialogTurnStatus.COMPLETE, result)

    def replace_dialog(self, dialog_id, options=None):
        self._end_active_dialog(DialogReason.REPLACE_CALLED)
        return self.begin_dialog(dialog_id, options)

    def cancel_all_dialogs(self):
        if not self.stack:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        while self.stack:
            self._end_active_dialog(DialogReason.CANCEL_CALLED)
        return DialogTurnResult(DialogTurnStatus.CANCELLED)

    def _get_dialog(self, dialog_id):
        dialog = self.find_dialog(dialog_id)
        if dialog is None:
            raise DialogNotFoundError(f"Dialog '{dialog_id}' was not found.")
        return dialog

    def _end_active_dialog(self, reason):
        instance = self.active_dialog
        if instance is None:
            return
        dialog = self.find_dialog(instance.id)
        if dialog is not None:
            dialog.end_dialog(self.context, instance, reason)
        self.stack.pop()
        logger.debug(f"Popped '{instance.id}' ({reason.value})")
