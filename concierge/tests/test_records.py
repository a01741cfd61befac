from django.test import SimpleTestCase

from concierge.dialogs import DialogInstance, DialogState
from concierge.records import DateTimeResolution, GuestInfo, ResultKind, UserInfo, WakeUpInfo
from concierge.serialization import KIND_KEY, decode, encode, fingerprint, registered_kinds


class RecordEncodingTest(SimpleTestCase):
    """Kind-tagged encoding of records and dialog state"""

    def test_record_carries_kind_tag(self):
        data = GuestInfo(name='Alice', room='12').to_dict()
        self.assertEqual(data, {KIND_KEY: 'guest_info', 'name': 'Alice', 'room': '12'})

    def test_nested_user_info_is_restored(self):
        user_info = UserInfo(guest=GuestInfo(name='Alice', room='12'), wake_up=WakeUpInfo(time='07:00:00'))

        restored = decode(encode(user_info))

        self.assertIsInstance(restored, UserInfo)
        self.assertIsInstance(restored.guest, GuestInfo)
        self.assertEqual(restored.guest_name, 'Alice')
        self.assertEqual(restored.room, '12')
        self.assertEqual(restored.wake_up.time, '07:00:00')
        self.assertIsNone(restored.table)

    def test_dialog_stack_is_restored(self):
        state = DialogState([
            DialogInstance('mainDialog', {'step_index': 1, 'values': {}, 'options': None}),
            DialogInstance('alarmDialog', {'dialogs': DialogState([DialogInstance('dateTimePrompt')])}),
        ])

        restored = decode(encode(state))

        self.assertEqual([instance.id for instance in restored.dialog_stack], ['mainDialog', 'alarmDialog'])
        self.assertEqual(restored.dialog_stack[0].state['step_index'], 1)
        inner = restored.dialog_stack[1].state['dialogs']
        self.assertIsInstance(inner, DialogState)
        self.assertEqual(inner.dialog_stack[0].id, 'dateTimePrompt')

    def test_unregistered_kind_stays_a_dict(self):
        data = {KIND_KEY: 'something_else', 'value': 1}
        self.assertEqual(decode(data), data)

    def test_all_result_kinds_are_registered(self):
        kinds = registered_kinds()
        for kind in ResultKind:
            self.assertIn(kind.value, kinds)

    def test_fingerprint_ignores_key_order(self):
        self.assertEqual(fingerprint({'a': 1, 'b': [1, 2]}), fingerprint({'b': [1, 2], 'a': 1}))
        self.assertNotEqual(fingerprint({'a': 1}), fingerprint({'a': 2}))


class DateTimeResolutionTest(SimpleTestCase):

    def test_point_value_wins_over_range_start(self):
        candidate = DateTimeResolution(value='07:00:00', start='06:00:00', end='08:00:00')
        self.assertEqual(candidate.resolved, '07:00:00')

    def test_range_start_used_without_value(self):
        candidate = DateTimeResolution(start='2026-10-20 08:00:00', end='2026-10-20 12:00:00')
        self.assertEqual(candidate.resolved, '2026-10-20 08:00:00')

    def test_nothing_resolved(self):
        self.assertIsNone(DateTimeResolution().resolved)
