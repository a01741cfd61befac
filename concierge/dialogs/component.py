from .base import END_OF_TURN, Dialog, DialogContext, DialogReason, DialogSet, DialogState, DialogTurnStatus


class ComponentDialog(Dialog):
    """
    A dialog made of other dialogs.

    The inner stack lives in this dialog's own instance state, so the outer
    stack only ever sees one entry for the whole component. The first dialog
    added is started when the component begins, unless ``initial_dialog_id``
    is set explicitly.
    """
    persisted_dialog_state = 'dialogs'

    def __init__(self, dialog_id):
        super().__init__(dialog_id)
        self._dialogs = DialogSet()
        self.initial_dialog_id = None

    def add_dialog(self, dialog):
        self._dialogs.add(dialog)
        if self.initial_dialog_id is None:
            self.initial_dialog_id = dialog.id
        return self

    def find_dialog(self, dialog_id):
        return self._dialogs.find(dialog_id)

    def begin_dialog(self, dc, options=None):
        inner_state = DialogState()
        dc.active_dialog.state[self.persisted_dialog_state] = inner_state
        inner_dc = DialogContext(self._dialogs, dc.context, inner_state, parent=dc)

        turn_result = inner_dc.begin_dialog(self.initial_dialog_id, options)
        return self._end_if_complete(dc, turn_result)

    def continue_dialog(self, dc):
        inner_dc = self._inner_context(dc.context, dc.active_dialog, parent=dc)
        turn_result = inner_dc.continue_dialog()
        return self._end_if_complete(dc, turn_result)

    def resume_dialog(self, dc, reason, result=None):
        # Nothing is ever pushed above a component on the outer stack by its
        # own steps; the inner stack is still waiting for input.
        return END_OF_TURN

    def end_dialog(self, turn_context, instance, reason):
        if reason == DialogReason.CANCEL_CALLED:
            self._inner_context(turn_context, instance).cancel_all_dialogs()

    def _inner_context(self, turn_context, instance, parent=None):
        inner_state = instance.state.get(self.persisted_dialog_state)
        if inner_state is None:
            inner_state = instance.state[self.persisted_dialog_state] = DialogState()
        return DialogContext(self._dialogs, turn_context, inner_state, parent=parent)

    def _end_if_complete(self, dc, turn_result):
        if turn_result.status == DialogTurnStatus.WAITING:
            return END_OF_TURN
        if turn_result.status == DialogTurnStatus.CANCELLED:
            return dc.end_dialog(None)
        return dc.end_dialog(turn_result.result)
