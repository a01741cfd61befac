from concierge.dialogs import DialogSet, DialogTurnStatus
from concierge.services.accessors import ConciergeAccessors
from concierge.services.state import ConversationState, UserState
from concierge.services.turn_context import Activity, ActivityTypes, TurnContext


def make_activity(text='', conversation_id='conversation-1', user_id='user-1',
                  channel_id='test', activity_type=ActivityTypes.MESSAGE):
    return Activity(
        type=activity_type,
        text=text,
        channel_id=channel_id,
        conversation_id=conversation_id,
        user_id=user_id,
    )


def make_turn_context(text='', **kwargs):
    return TurnContext(make_activity(text, **kwargs))


def make_accessors():
    return ConciergeAccessors(ConversationState(), UserState())


class DialogTestClient:
    """
    Drives one root dialog turn by turn against the real state stores:
    continue whatever is active, otherwise begin the root dialog.
    """

    def __init__(self, root_dialog_id, dialogs, accessors, options=None, **activity_kwargs):
        self.root_dialog_id = root_dialog_id
        self.accessors = accessors
        self.options = options
        self.activity_kwargs = activity_kwargs
        self.dialog_set = DialogSet(accessors.dialog_state)
        for dialog in dialogs:
            self.dialog_set.add(dialog)
        self.last_result = None

    def send(self, text):
        """Run one turn and return the texts of the replies."""
        turn_context = make_turn_context(text, **self.activity_kwargs)
        dc = self.dialog_set.create_context(turn_context)
        result = dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            result = dc.begin_dialog(self.root_dialog_id, self.options)
        self.accessors.save_changes(turn_context)
        self.last_result = result
        self.last_turn_context = turn_context
        return [reply.text for reply in turn_context.responses]
