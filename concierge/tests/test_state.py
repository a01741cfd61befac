from django.test import TestCase

from concierge.exceptions import NullArgumentError
from concierge.models import ConversationStateRecord, UserStateRecord
from concierge.records import GuestInfo, UserInfo
from concierge.services.accessors import ConciergeAccessors
from concierge.services.state import ConversationState, UserState

from .utils import make_turn_context


class BotStateTest(TestCase):
    """Conversation and user state stores backed by the database"""

    def setUp(self):
        self.user_state = UserState()
        self.conversation_state = ConversationState()
        self.user_info = self.user_state.create_property('UserInfo')

    def test_missing_property_without_default_is_none(self):
        turn_context = make_turn_context('hi')
        self.assertIsNone(self.user_info.get(turn_context))

    def test_default_factory_is_stored_and_persisted(self):
        turn_context = make_turn_context('hi')
        user_info = self.user_info.get(turn_context, UserInfo)
        user_info.guest = GuestInfo(name='Alice', room='12')
        self.user_state.save_changes(turn_context)

        record = UserStateRecord.objects.get(channel_id='test', user_id='user-1')
        self.assertEqual(record.data['UserInfo']['guest']['name'], 'Alice')

        # A new turn reads the record back as objects
        restored = self.user_info.get(make_turn_context('again'))
        self.assertIsInstance(restored, UserInfo)
        self.assertEqual(restored.guest_name, 'Alice')

    def test_unchanged_state_is_not_written_again(self):
        turn_context = make_turn_context('hi')
        self.user_info.set(turn_context, UserInfo(guest=GuestInfo(name='Bob', room='3')))
        self.user_state.save_changes(turn_context)
        stored = UserStateRecord.objects.get().data

        with self.assertNumQueries(0):
            self.user_state.save_changes(turn_context)

        next_turn = make_turn_context('again')
        self.user_info.get(next_turn)
        with self.assertNumQueries(0):
            self.user_state.save_changes(next_turn)

        self.assertEqual(UserStateRecord.objects.get().data, stored)

    def test_force_save_writes_unchanged_state(self):
        turn_context = make_turn_context('hi')
        self.user_info.set(turn_context, UserInfo())
        self.user_state.save_changes(turn_context)
        UserStateRecord.objects.all().delete()

        self.user_state.save_changes(turn_context, force=True)

        self.assertEqual(UserStateRecord.objects.count(), 1)

    def test_clear_state_saves_empty_state(self):
        turn_context = make_turn_context('hi')
        self.user_info.set(turn_context, UserInfo())
        self.user_state.save_changes(turn_context)

        self.user_state.clear_state(turn_context)
        self.user_state.save_changes(turn_context)

        self.assertEqual(UserStateRecord.objects.get().data, {})

    def test_delete_removes_record(self):
        turn_context = make_turn_context('hi')
        self.user_info.set(turn_context, UserInfo())
        self.user_state.save_changes(turn_context)

        self.user_state.delete(turn_context)

        self.assertFalse(UserStateRecord.objects.exists())

    def test_property_delete(self):
        turn_context = make_turn_context('hi')
        self.user_info.set(turn_context, UserInfo())
        self.user_info.delete(turn_context)
        self.assertIsNone(self.user_info.get(turn_context))

    def test_conversation_state_is_scoped_by_conversation(self):
        dialog_state = self.conversation_state.create_property('Scratch')
        first = make_turn_context('hi', conversation_id='a')
        dialog_state.set(first, {'count': 1})
        self.conversation_state.save_changes(first)

        self.assertIsNone(dialog_state.get(make_turn_context('hi', conversation_id='b')))
        self.assertEqual(dialog_state.get(make_turn_context('hi', conversation_id='a')), {'count': 1})
        self.assertEqual(ConversationStateRecord.objects.count(), 1)

    def test_storage_key_requires_ids(self):
        turn_context = make_turn_context('hi', conversation_id=None)
        with self.assertRaises(ValueError):
            self.conversation_state.load(turn_context)

    def test_reading_before_load_fails(self):
        with self.assertRaises(RuntimeError):
            self.user_state.get_property_value(make_turn_context('hi'), 'UserInfo')

    def test_property_name_required(self):
        with self.assertRaises(ValueError):
            self.user_state.create_property('')


class ConciergeAccessorsTest(TestCase):

    def test_requires_both_stores(self):
        with self.assertRaises(NullArgumentError) as cm:
            ConciergeAccessors(None, UserState())
        self.assertEqual(cm.exception.argument_name, 'conversation_state')

        with self.assertRaises(NullArgumentError) as cm:
            ConciergeAccessors(ConversationState(), None)
        self.assertEqual(cm.exception.argument_name, 'user_state')

    def test_property_names(self):
        accessors = ConciergeAccessors(ConversationState(), UserState())
        self.assertEqual(accessors.dialog_state.name, 'DialogState')
        self.assertEqual(accessors.user_info.name, 'UserInfo')
        self.assertEqual(accessors.alarm_specific_dialog_state.name, 'AlarmSpecificDialogState')

    def test_save_changes_saves_both_stores(self):
        accessors = ConciergeAccessors(ConversationState(), UserState())
        turn_context = make_turn_context('hi')
        accessors.user_info.set(turn_context, UserInfo())
        accessors.alarm_specific_dialog_state.set(turn_context, {'marker': 'x'})

        accessors.save_changes(turn_context)

        self.assertEqual(UserStateRecord.objects.count(), 1)
        self.assertEqual(ConversationStateRecord.objects.get().data['AlarmSpecificDialogState'], {'marker': 'x'})
