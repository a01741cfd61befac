from django.urls import path

from . import consumers

websocket_urlpatterns = [
    path('ws/concierge/<str:conversation_id>/', consumers.ConciergeConsumer.as_asgi()),
]
