from django.test import TestCase
from faker import Faker

from concierge.exceptions import NoResolutionError, NullArgumentError
from concierge.models import ConversationStateRecord, UserStateRecord
from concierge.records import DateTimeResolution
from concierge.services.adapter import BotAdapter
from concierge.services.bot import ConciergeBot, get_bot
from concierge.services.state import ConversationState, UserState
from concierge.services.turn_context import ActivityTypes

from .utils import make_activity

NAME_PROMPT = "What is your name?"
MENU = "How can I help you?"


class FixedRecognizer:
    def __init__(self, candidates):
        self.candidates = candidates

    def recognize(self, text, reference=None):
        return list(self.candidates)


class ConciergeBotTest(TestCase):
    """Turn dispatching through the adapter, as the transports run it"""

    def setUp(self):
        self.bot = ConciergeBot(ConversationState(), UserState())
        self.adapter = BotAdapter()

    def send(self, text, bot=None, **kwargs):
        responses = self.adapter.process_activity(make_activity(text, **kwargs), (bot or self.bot).on_turn)
        return [reply.text for reply in responses]

    def test_requires_state_stores(self):
        with self.assertRaises(NullArgumentError):
            ConciergeBot(None, UserState())
        with self.assertRaises(NullArgumentError):
            ConciergeBot(ConversationState(), None)

    def test_get_bot_is_shared(self):
        self.assertIs(get_bot(), get_bot())

    def test_non_message_activity_is_acknowledged(self):
        replies = self.send('', activity_type=ActivityTypes.CONVERSATION_UPDATE)

        self.assertEqual(replies, ["conversationUpdate event detected"])
        self.assertFalse(ConversationStateRecord.objects.exists())

    def test_new_user_starts_check_in(self):
        self.assertEqual(self.send('hello'), [NAME_PROMPT])

    def test_check_in_then_menu_in_same_turn(self):
        self.send('hello')
        self.send('Alice')

        replies = self.send('12')

        self.assertEqual(replies, ["Great, enjoy your stay!", MENU])
        user = UserStateRecord.objects.get(user_id='user-1').data['UserInfo']
        self.assertEqual((user['guest']['name'], user['guest']['room']), ('Alice', '12'))

    def test_returning_guest_goes_to_menu(self):
        for text in ('hello', 'Alice', '12'):
            self.send(text)

        # A new conversation for the same user skips check-in
        self.assertEqual(self.send('hi again', conversation_id='conversation-2'), [MENU])

    def test_end_to_end_wake_up(self):
        replies = []
        for text in ('hello', 'Alice', '12', 'wake up', 'tomorrow 7am'):
            replies.append(self.send(text))

        self.assertEqual(replies[0], [NAME_PROMPT])
        self.assertEqual(replies[1], ["Hi Alice. What room will you be staying in?"])
        self.assertEqual(replies[2][-1], MENU)
        self.assertEqual(replies[3], ["Hi Alice. When would you like your alarm set for?"])
        confirmation = replies[4][0]
        self.assertTrue(confirmation.startswith("Your alarm is set to "))
        self.assertIn('7', confirmation)
        self.assertIn('room 12', confirmation)
        self.assertEqual(replies[4][-1], MENU)

        user = UserStateRecord.objects.get().data['UserInfo']
        self.assertIn('07:00:00', user['wake_up']['time'])

    def test_checked_in_guests_get_their_own_records(self):
        fake = Faker()
        guests = [(f'guest-{index}', fake.first_name(), str(fake.random_int(min=100, max=999))) for index in range(3)]

        for user_id, name, room in guests:
            for text in ('hello', name, room):
                self.send(text, user_id=user_id, conversation_id=f'conversation-{user_id}')

        for user_id, name, room in guests:
            guest = UserStateRecord.objects.get(user_id=user_id).data['UserInfo']['guest']
            self.assertEqual((guest['name'], guest['room']), (name, room))

    def test_failed_turn_leaves_state_untouched(self):
        bot = ConciergeBot(ConversationState(), UserState(), recognizer=FixedRecognizer([DateTimeResolution()]))
        for text in ('hello', 'Alice', '12', 'wake up'):
            self.send(text, bot=bot)
        conversation_before = ConversationStateRecord.objects.get().data
        user_before = UserStateRecord.objects.get().data

        with self.assertRaises(NoResolutionError):
            self.send('tomorrow 7am', bot=bot)

        self.assertEqual(ConversationStateRecord.objects.get().data, conversation_before)
        self.assertEqual(UserStateRecord.objects.get().data, user_before)

        # The alarm prompt is still waiting for an answer
        ok_bot = ConciergeBot(ConversationState(), UserState(), recognizer=FixedRecognizer([DateTimeResolution(value='06:30:00')]))
        self.assertEqual(self.send('6:30', bot=ok_bot)[0], "Your alarm is set to 06:30:00 for room 12.")


class BotAdapterTest(TestCase):

    def test_requires_activity_and_logic(self):
        with self.assertRaises(NullArgumentError):
            BotAdapter().process_activity(None, lambda turn_context: None)
        with self.assertRaises(NullArgumentError):
            BotAdapter().process_activity(make_activity('hi'), None)

    def test_returns_replies_with_conversation_ids(self):
        def logic(turn_context):
            turn_context.send_activity('one')
            turn_context.send_activity('two')

        responses = BotAdapter().process_activity(make_activity('hi', conversation_id='c-9'), logic)

        self.assertEqual([reply.text for reply in responses], ['one', 'two'])
        self.assertTrue(all(reply.conversation_id == 'c-9' for reply in responses))

    def test_errors_propagate_and_roll_back(self):
        def logic(turn_context):
            ConversationStateRecord.objects.create(channel_id='test', conversation_id='c-1', data={})
            raise RuntimeError('boom')

        with self.assertRaises(RuntimeError):
            BotAdapter().process_activity(make_activity('hi'), logic)

        self.assertFalse(ConversationStateRecord.objects.exists())
