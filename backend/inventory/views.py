# inventory/views.py
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from accounts.permissions import HasClientSession
from . import services
from .models import InventoryEntry
from .serializers import (
    ClaimOut,
    InventoryActionIn,
    InventoryEntryOut,
    RedemptionRequestOut,
    SellOut,
)


def _inventory_id(request):
    serializer = InventoryActionIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data["inventory_id"]


@api_view(["GET"])
@permission_classes([HasClientSession])
def inventory_list(request):
    entries = services.list_available(request.user.uuid)
    return Response({"ok": True, "items": InventoryEntryOut(entries, many=True).data})


@api_view(["POST"])
@permission_classes([HasClientSession])
def sell_item(request):
    inventory_id = _inventory_id(request)
    amount = services.sell(request.user.uuid, inventory_id)
    out = SellOut({
        "inventory_id": inventory_id,
        "status": InventoryEntry.STATUS_SOLD,
        "sold_amount": amount,
    })
    return Response({"ok": True, **out.data})


@api_view(["POST"])
@permission_classes([HasClientSession])
def claim_item(request):
    result = services.claim(request.user.uuid, _inventory_id(request))
    return Response({"ok": True, **ClaimOut(result).data})


@api_view(["GET"])
@permission_classes([HasClientSession])
def request_list(request):
    requests = services.list_requests(request.user.uuid)
    return Response({"ok": True, "requests": RedemptionRequestOut(requests, many=True).data})
