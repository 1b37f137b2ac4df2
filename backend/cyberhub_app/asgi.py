import os
import django
from channels.routing import ProtocolTypeRouter, URLRouter
from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cyberhub_app.settings")
django.setup()

# Import websocket routes
import cases.routing

application = ProtocolTypeRouter({
    "http": get_asgi_application(),

    "websocket": URLRouter(
        cases.routing.websocket_urlpatterns
    ),
})
