import logging

from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from frontdesk.utils.exception_handlers import first_validation_error, normalize_errors
from frontdesk.utils.responses import (
    error_response,
    server_error_response,
    success_response,
    unprocessable_response,
)

from ..exceptions import BotError
from ..models import ActivityLog
from ..serializers import ActivitySerializer
from ..services.adapter import BotAdapter
from ..services.bot import get_bot

logger = logging.getLogger(__name__)


class BotMessagesView(APIView):
    """
    Single entry point for channel messages. Each POST is one turn; the
    replies for that turn are returned in the response body.
    """
    authentication_classes = []
    permission_classes = []

    def post(self, request):
        activity_log = ActivityLog.objects.create(
            payload=request.data,
            processed_successfully=False
        )
        try:
            serializer = ActivitySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            activity = serializer.save()

            responses = BotAdapter().process_activity(activity, get_bot().on_turn)

            activity_log.processed_successfully = True
            activity_log.save()

            logger.info(f"Processed {activity.type} from {activity.user_id}: {len(responses)} replies")
            return success_response(data={'activities': [reply.to_dict() for reply in responses]})

        except serializers.ValidationError as ve:
            message = first_validation_error(ve.detail)
            logger.warning(f"Bad request processing activity: {message}")
            self._record_failure(activity_log, message)
            return error_response(message, errors=normalize_errors(ve.detail))

        except BotError as be:
            message = str(be)
            logger.warning(f"Turn failed on a bot error: {message}")
            self._record_failure(activity_log, message)
            return unprocessable_response(message)

        except Exception as e:
            logger.error(f"Error processing activity: {e}", exc_info=True)
            self._record_failure(activity_log, str(e))
            return server_error_response()

    def _record_failure(self, activity_log, message):
        activity_log.error_message = message
        activity_log.save()


class HealthView(APIView):
    authentication_classes = []
    permission_classes = []

    def get(self, request):
        return Response({'status': 'ok'}, status=status.HTTP_200_OK)
