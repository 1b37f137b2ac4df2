# inventory/services.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.utils import timezone

from accounts.models import UserSettings
from core.errors import (
    CannotSellMoney,
    InventoryNotFound,
    NotAvailable,
    RequestNotFound,
    RequestNotPending,
    TradeLinkMissing,
)
from .credits import request_balance_credit
from .models import InventoryEntry, RedemptionRequest

logger = logging.getLogger(__name__)

MONEY = "money"


@dataclass(frozen=True)
class ClaimResult:
    entry: InventoryEntry
    request: Optional[RedemptionRequest] = None
    credited_amount: Optional[Decimal] = None


# ======================================================
# INTERNAL
# ======================================================
def _get_entry_for_update(user_uuid, inventory_id):
    try:
        return InventoryEntry.objects.select_for_update().get(pk=inventory_id, user_uuid=user_uuid)
    except (InventoryEntry.DoesNotExist, ValueError, TypeError):
        raise InventoryNotFound()


def _get_request_for_update(request_id):
    try:
        return (
            RedemptionRequest.objects.select_for_update()
            .select_related("inventory")
            .get(pk=request_id)
        )
    except RedemptionRequest.DoesNotExist:
        raise RequestNotFound()


def _set_entry_status(entry, status):
    entry.status = status
    entry.save(update_fields=["status", "updated_at"])


# ======================================================
# USER ACTIONS
# ======================================================
def list_available(user_uuid):
    return list(InventoryEntry.objects.filter(user_uuid=user_uuid, status__in=InventoryEntry.OPEN_STATUSES))


def list_requests(user_uuid):
    return list(RedemptionRequest.objects.filter(user_uuid=user_uuid))


@transaction.atomic
def sell(user_uuid, inventory_id) -> Decimal:
    entry = _get_entry_for_update(user_uuid, inventory_id)

    if entry.status != InventoryEntry.STATUS_AVAILABLE:
        raise NotAvailable()
    if entry.item_type == MONEY:
        raise CannotSellMoney()

    _set_entry_status(entry, InventoryEntry.STATUS_SOLD)
    amount = entry.sell_price
    transaction.on_commit(
        lambda: request_balance_credit(user_uuid, amount, reason=f"sell:{entry.pk}")
    )

    logger.info("Inventory %s sold by %s for %s", entry.pk, user_uuid, amount)
    return amount


@transaction.atomic
def claim(user_uuid, inventory_id) -> ClaimResult:
    """
    Money prizes are credited straight away. Skins and physical prizes
    become a pending redemption request for an operator and need a trade
    link on file first.
    """
    entry = _get_entry_for_update(user_uuid, inventory_id)

    if entry.status != InventoryEntry.STATUS_AVAILABLE:
        raise NotAvailable()

    if entry.item_type == MONEY:
        _set_entry_status(entry, InventoryEntry.STATUS_RECEIVED)
        amount = entry.amount
        transaction.on_commit(
            lambda: request_balance_credit(user_uuid, amount, reason=f"claim:{entry.pk}")
        )
        logger.info("Money prize %s credited to %s (%s)", entry.pk, user_uuid, amount)
        return ClaimResult(entry=entry, credited_amount=amount)

    user_settings = UserSettings.objects.filter(user_uuid=user_uuid).first()
    trade_link = user_settings.trade_link if user_settings else ""
    if not trade_link:
        raise TradeLinkMissing()

    request = RedemptionRequest.objects.create(
        user_uuid=user_uuid,
        inventory=entry,
        item_title=entry.title,
        item_type=entry.item_type,
        trade_link=trade_link,
    )
    _set_entry_status(entry, InventoryEntry.STATUS_PROCESSING)

    logger.info("Redemption %s created for inventory %s (%s)", request.pk, entry.pk, user_uuid)
    return ClaimResult(entry=entry, request=request)


# ======================================================
# OPERATOR ACTIONS
# ======================================================
def _resolve(request_id, request_status, entry_status, comment=None):
    req = _get_request_for_update(request_id)
    if req.status != RedemptionRequest.STATUS_PENDING:
        raise RequestNotPending()

    req.status = request_status
    req.resolved_at = timezone.now()
    fields = ["status", "resolved_at", "updated_at"]
    if comment is not None:
        req.admin_comment = comment
        fields.append("admin_comment")
    req.save(update_fields=fields)

    _set_entry_status(req.inventory, entry_status)

    logger.info("Redemption %s -> %s (inventory %s -> %s)", req.pk, request_status, req.inventory_id, entry_status)
    return req


@transaction.atomic
def approve(request_id, comment=None):
    return _resolve(
        request_id,
        RedemptionRequest.STATUS_APPROVED,
        InventoryEntry.STATUS_RECEIVED,
        comment,
    )


@transaction.atomic
def deny(request_id, comment=""):
    return _resolve(
        request_id,
        RedemptionRequest.STATUS_DENIED,
        InventoryEntry.STATUS_AVAILABLE,
        comment,
    )


@transaction.atomic
def return_request(request_id, comment=None):
    return _resolve(
        request_id,
        RedemptionRequest.STATUS_RETURNED,
        InventoryEntry.STATUS_AVAILABLE,
        comment,
    )


def list_redemption_requests(status=None):
    qs = RedemptionRequest.objects.select_related("inventory")
    if status:
        qs = qs.filter(status=status)
    return list(qs)
