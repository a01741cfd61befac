from django.urls import path

from .views import BotMessagesView, HealthView

urlpatterns = [
    path('messages/', BotMessagesView.as_view(), name='bot-messages'),
    path('health/', HealthView.as_view(), name='health'),
]
