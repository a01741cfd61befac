'''
ASGI config for frontdesk project.
'''
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'frontdesk.settings')

# Import Django before the channels routing so the app registry is ready
import django
from django.core.asgi import get_asgi_application

django.setup()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from concierge.routing import websocket_urlpatterns

application = ProtocolTypeRouter({
    "http": get_asgi_application(),
    "websocket": AllowedHostsOriginValidator(
        URLRouter(websocket_urlpatterns)
    ),
})
