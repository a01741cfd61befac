import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from rest_framework import serializers

from frontdesk.utils.exception_handlers import first_validation_error, normalize_errors

from .exceptions import BotError
from .serializers import ActivitySerializer
from .services.adapter import BotAdapter
from .services.bot import get_bot

logger = logging.getLogger(__name__)


class ConciergeConsumer(AsyncJsonWebsocketConsumer):
    """
    Web chat transport. Every JSON frame received is one inbound activity for
    the conversation named in the URL; the replies go back as one frame.
    """

    async def connect(self):
        self.conversation_id = self.scope['url_route']['kwargs']['conversation_id']
        await self.accept()
        logger.info(f"Web chat connected for conversation {self.conversation_id}")

    async def disconnect(self, close_code):
        logger.info(f"Web chat for conversation {self.conversation_id} closed ({close_code})")

    async def receive_json(self, content):
        if not isinstance(content, dict):
            await self.send_json({'success': False, 'message': 'Each frame must be a JSON object.'})
            return

        payload = {**content, 'conversation_id': self.conversation_id}
        try:
            replies = await self.run_turn(payload)
        except serializers.ValidationError as ve:
            await self.send_json({
                'success': False,
                'message': first_validation_error(ve.detail),
                'errors': normalize_errors(ve.detail),
            })
            return
        except BotError as be:
            logger.warning(f"Turn failed on a bot error: {be}")
            await self.send_json({'success': False, 'message': str(be)})
            return

        await self.send_json({'activities': replies})

    @database_sync_to_async
    def run_turn(self, payload):
        serializer = ActivitySerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        activity = serializer.save()
        responses = BotAdapter().process_activity(activity, get_bot().on_turn)
        return [reply.to_dict() for reply in responses]
