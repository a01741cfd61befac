from .messages import BotMessagesView, HealthView
