from unittest.mock import MagicMock, patch

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from concierge.exceptions import NoResolutionError
from concierge.models import ActivityLog, UserStateRecord


class BotMessagesViewTest(TestCase):
    """POST /api/messages/"""

    def setUp(self):
        self.client = APIClient()
        self.url = reverse('bot-messages')

    def post(self, text, **extra):
        payload = {'type': 'message', 'text': text, 'conversation_id': 'web-1', 'user_id': 'visitor-1'}
        payload.update(extra)
        return self.client.post(self.url, payload, format='json')

    def texts(self, response):
        return [activity['text'] for activity in response.data['data']['activities']]

    def test_first_message_asks_for_name(self):
        response = self.post('hello')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['data']['activities'], [{'type': 'message', 'text': 'What is your name?'}])

        log = ActivityLog.objects.get()
        self.assertTrue(log.processed_successfully)
        self.assertEqual(log.payload['text'], 'hello')

    def test_menu_carries_suggested_actions(self):
        self.post('hello')
        self.post('Alice')

        response = self.post('12')

        menu = response.data['data']['activities'][-1]
        self.assertEqual(menu['text'], 'How can I help you?')
        self.assertEqual(menu['suggested_actions'], [
            {'type': 'imBack', 'title': 'Reserve Table', 'value': 'Reserve Table'},
            {'type': 'imBack', 'title': 'Wake Up', 'value': 'Wake Up'},
        ])

    @override_settings(BOT_DEFAULT_CHANNEL='kiosk')
    def test_channel_defaults_from_settings(self):
        self.post('hello')
        self.post('Alice')
        self.post('12')

        self.assertEqual(UserStateRecord.objects.get().channel_id, 'kiosk')

    def test_conversation_update(self):
        response = self.post('', type='conversationUpdate')

        self.assertEqual(self.texts(response), ['conversationUpdate event detected'])

    def test_missing_user_id_is_rejected(self):
        response = self.client.post(self.url, {'text': 'hello', 'conversation_id': 'web-1'}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.data['success'])
        self.assertIn('user_id', response.data['errors'])

        log = ActivityLog.objects.get()
        self.assertFalse(log.processed_successfully)
        self.assertIn('user_id', log.error_message)

    @patch('concierge.views.messages.get_bot')
    def test_bot_error_is_unprocessable(self, mock_get_bot):
        mock_get_bot.return_value = MagicMock(on_turn=MagicMock(side_effect=NoResolutionError('No time')))

        response = self.post('sometime')

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data, {'success': False, 'message': 'No time'})
        self.assertEqual(ActivityLog.objects.get().error_message, 'No time')

    @patch('concierge.views.messages.get_bot')
    def test_unexpected_error_is_server_error(self, mock_get_bot):
        mock_get_bot.return_value = MagicMock(on_turn=MagicMock(side_effect=RuntimeError('database down')))

        response = self.post('hello')

        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.data['success'])
        log = ActivityLog.objects.get()
        self.assertFalse(log.processed_successfully)
        self.assertEqual(log.error_message, 'database down')


class HealthViewTest(TestCase):

    def test_health(self):
        response = APIClient().get(reverse('health'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'status': 'ok'})
