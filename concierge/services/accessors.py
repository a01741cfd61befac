from ..exceptions import NullArgumentError


class ConciergeAccessors:
    """
    The state handles used by the bot and its dialogs.

    Created once and passed explicitly to every dialog that needs to read or
    write persisted state.
    """

    DIALOG_STATE = 'DialogState'
    USER_INFO = 'UserInfo'
    ALARM_SPECIFIC_DIALOG_STATE = 'AlarmSpecificDialogState'

    def __init__(self, conversation_state, user_state):
        if conversation_state is None:
            raise NullArgumentError('conversation_state')
        if user_state is None:
            raise NullArgumentError('user_state')

        self.conversation_state = conversation_state
        self.user_state = user_state

        self.dialog_state = conversation_state.create_property(self.DIALOG_STATE)
        self.user_info = user_state.create_property(self.USER_INFO)
        self.alarm_specific_dialog_state = conversation_state.create_property(self.ALARM_SPECIFIC_DIALOG_STATE)

    def save_changes(self, turn_context, force=False):
        self.conversation_state.save_changes(turn_context, force)
        self.user_state.save_changes(turn_context, force)
