# cases/engine.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

from core.errors import AlreadyOpened, CaseEmpty, NotEnoughDeposit, OpenFailed
from inventory.credits import request_balance_credit
from inventory.models import InventoryEntry
from . import catalog
from .broadcast import publish_drop
from .models import Case, CaseClaim, Item, Spin
from .periods import day_key, month_key, period_key
from .progress import Progress, compute_progress

logger = logging.getLogger(__name__)


class StockExhausted(Exception):
    """Finite stock hit zero between the draw and the grant."""


@dataclass(frozen=True)
class Prize:
    title: str
    type: str
    image_url: str
    rarity: str
    value: Decimal
    sell_price: Decimal
    item_id: str
    inventory_id: int
    inventory_status: str
    spin_id: int
    case_id: str
    period_key: str


@dataclass(frozen=True)
class CaseStatus:
    case: Case
    progress: Decimal
    available: bool
    is_claimed: bool
    period_key: str

    @property
    def state(self):
        if self.is_claimed:
            return "claimed"
        return "unlocked" if self.available else "locked"


def weighted_choice(rows: Sequence, rng: Optional[random.Random] = None, weight=lambda row: row.weight):
    """
    Pick one row with probability weight / total.

    Draws ``r`` in ``[0, total)`` and walks the rows subtracting weights until
    ``r <= 0``. Zero-weight rows are never picked; if float drift walks past
    the end, the last positive-weight row wins.
    """
    rng = rng or random
    candidates = [row for row in rows if weight(row) > 0]
    if not candidates:
        raise CaseEmpty()

    total = sum(weight(row) for row in candidates)
    r = rng.random() * total
    for row in candidates:
        r -= weight(row)
        if r <= 0:
            return row
    return candidates[-1]


class CaseEngine:
    """
    Eligibility checks and the case-opening transaction.

    Behaviour switches come from ``settings.CASE_ENGINE``:
    ``DECREMENT_STOCK``, ``SKIP_OUT_OF_STOCK``, ``REQUIRE_ACTIVE_ITEMS``,
    ``AUTO_CREDIT_MONEY``.
    """

    def __init__(self, billing_client=None, rng=None, clock=None, options=None):
        self.billing_client = billing_client
        self.rng = rng or random.SystemRandom()
        self.clock = clock
        self.options = {**settings.CASE_ENGINE, **(options or {})}

    def _now(self):
        return self.clock() if self.clock else None

    def progress_for(self, user_uuid) -> Progress:
        return compute_progress(user_uuid, client=self.billing_client, now=self._now())

    # ---------------------------------------------------
    # STATUS (/api/me)
    # ---------------------------------------------------
    def case_statuses(self, user_uuid, progress: Progress) -> list[CaseStatus]:
        now = self._now()
        keys = {day_key(now), month_key(now)}
        claimed = set(
            CaseClaim.objects.filter(user_uuid=user_uuid, period_key__in=keys)
            .values_list("case_id", "period_key")
        )

        statuses = []
        for case in catalog.list_active_cases():
            key = period_key(case.type, now)
            current = progress.for_case_type(case.type)
            is_claimed = (case.pk, key) in claimed
            statuses.append(CaseStatus(
                case=case,
                progress=current,
                available=current >= case.threshold and not is_claimed,
                is_claimed=is_claimed,
                period_key=key,
            ))
        return statuses

    # ---------------------------------------------------
    # OPEN
    # ---------------------------------------------------
    def _candidates(self, case):
        contents = catalog.drawable_contents(case, self.options)
        if not contents:
            raise CaseEmpty()
        return contents

    def open_case(self, user_uuid, case_id, nickname="") -> Prize:
        case = catalog.get_case(case_id)
        key = period_key(case.type, self._now())

        # advisory only; the unique constraint decides races
        if CaseClaim.objects.filter(user_uuid=user_uuid, case=case, period_key=key).exists():
            raise AlreadyOpened()

        progress = self.progress_for(user_uuid).for_case_type(case.type)
        if progress < case.threshold:
            logger.info(
                "Open refused for %s on %s: progress %s < threshold %s",
                user_uuid, case.pk, progress, case.threshold,
            )
            raise NotEnoughDeposit()

        content = weighted_choice(self._candidates(case), rng=self.rng)

        try:
            prize = self._grant(user_uuid, nickname, case, key, content)
        except AlreadyOpened:
            logger.info("Concurrent open for %s on %s/%s lost the race", user_uuid, case.pk, key)
            raise
        except (DatabaseError, StockExhausted) as exc:
            logger.exception("Case open failed for %s on %s: %s", user_uuid, case.pk, exc)
            raise OpenFailed() from exc

        logger.info(
            "Case %s opened by %s (%s): %s [%s]",
            case.pk, user_uuid, key, prize.title, prize.rarity,
        )
        return prize

    @transaction.atomic
    def _grant(self, user_uuid, nickname, case, key, content) -> Prize:
        item = content.item

        try:
            with transaction.atomic():
                CaseClaim.objects.create(user_uuid=user_uuid, case=case, period_key=key)
        except IntegrityError:
            raise AlreadyOpened()

        spin = Spin.objects.create(
            user_uuid=user_uuid,
            nickname=nickname or "",
            case=case,
            case_title=case.title,
            period_key=key,
            item=item,
            prize_title=item.title,
            prize_type=item.type,
            prize_amount=item.display_price,
            rarity=content.rarity,
            image_url=item.image_url,
        )

        auto_credit = self.options["AUTO_CREDIT_MONEY"] and item.type == Item.TYPE_MONEY
        entry = InventoryEntry.objects.create(
            user_uuid=user_uuid,
            spin=spin,
            item=item,
            title=item.title,
            item_type=item.type,
            image_url=item.image_url,
            amount=item.display_price,
            sell_price=item.sell_price,
            rarity=content.rarity,
            status=InventoryEntry.STATUS_RECEIVED if auto_credit else InventoryEntry.STATUS_AVAILABLE,
        )

        if self.options["DECREMENT_STOCK"] and item.stock != Item.UNLIMITED_STOCK:
            updated = Item.objects.filter(pk=item.pk, stock__gt=0).update(stock=F("stock") - 1)
            if not updated:
                raise StockExhausted(item.pk)

        if auto_credit:
            transaction.on_commit(
                lambda: request_balance_credit(user_uuid, item.display_price, reason=f"case:{case.pk}:{key}")
            )
        transaction.on_commit(lambda: publish_drop(spin))

        return Prize(
            title=item.title,
            type=item.type,
            image_url=item.image_url,
            rarity=content.rarity,
            value=item.display_price,
            sell_price=item.sell_price,
            item_id=item.pk,
            inventory_id=entry.pk,
            inventory_status=entry.status,
            spin_id=spin.pk,
            case_id=case.pk,
            period_key=key,
        )
