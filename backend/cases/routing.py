from django.urls import re_path
from .consumers import DropsConsumer

websocket_urlpatterns = [
    re_path(r"ws/drops/$", DropsConsumer.as_asgi()),
]
