from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.test import SimpleTestCase, override_settings

from cases.broadcast import DROPS_GROUP
from cases.consumers import DropsConsumer


@override_settings(CHANNEL_LAYERS={"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}})
class DropsConsumerTests(SimpleTestCase):
    databases = {"default"}

    async def test_drop_is_forwarded(self):
        communicator = WebsocketCommunicator(DropsConsumer.as_asgi(), "/ws/drops/")
        connected, _ = await communicator.connect()
        self.assertTrue(connected)
        self.assertEqual(await communicator.receive_json_from(), {"event": "connected"})

        await get_channel_layer().group_send(
            DROPS_GROUP,
            {"type": "drop.created", "data": {"id": 1, "prize_title": "5 EUR"}},
        )
        message = await communicator.receive_json_from()
        self.assertEqual(message, {"event": "drop", "data": {"id": 1, "prize_title": "5 EUR"}})

        await communicator.send_json_to({"event": "ping"})
        self.assertEqual(await communicator.receive_json_from(), {"event": "pong"})

        await communicator.disconnect()
