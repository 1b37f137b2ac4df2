# cases/consumers.py
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .broadcast import DROPS_GROUP


class DropsConsumer(AsyncJsonWebsocketConsumer):
    """Read-only live feed of case drops (public, like /api/drops/recent)."""

    async def connect(self):
        await self.channel_layer.group_add(DROPS_GROUP, self.channel_name)
        await self.accept()
        await self.send_json({"event": "connected"})

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(DROPS_GROUP, self.channel_name)

    async def receive_json(self, content, **kwargs):
        if content.get("event") == "ping":
            await self.send_json({"event": "pong"})

    async def drop_created(self, message):
        await self.send_json({"event": "drop", "data": message["data"]})
