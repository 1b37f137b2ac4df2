# cases/broadcast.py
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

DROPS_GROUP = "drops_live"


def drop_payload(spin):
    return {
        "id": spin.id,
        "nickname": spin.nickname,
        "case_id": spin.case_id,
        "case_title": spin.case_title,
        "prize_title": spin.prize_title,
        "prize_type": spin.prize_type,
        "prize_amount": str(spin.prize_amount),
        "rarity": spin.rarity,
        "image_url": spin.image_url,
        "created_at": spin.created_at.isoformat() if spin.created_at else None,
    }


def publish_drop(spin):
    """
    Push a committed spin to websocket listeners. The grant is already
    durable at this point, so a channel-layer outage only costs the live
    notification.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(
            DROPS_GROUP,
            {"type": "drop.created", "data": drop_payload(spin)},
        )
    except Exception:
        logger.exception("Failed to broadcast drop %s", spin.id)
