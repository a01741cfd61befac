from django.apps import AppConfig


class ConciergeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'concierge'
    verbose_name = 'Concierge bot'

    def ready(self):
        # Registers the kind-tagged types used to decode stored state
        from . import records  # noqa: F401
        from .dialogs import base  # noqa: F401
