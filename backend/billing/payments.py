# billing/payments.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from django.conf import settings

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
DOTTED_DATE_RE = re.compile(r"^(\d{2})\.(\d{2})\.(\d{4})")

DEPOSIT_ITEM_TYPE = "DEPOSIT"


@dataclass(frozen=True)
class Payment:
    created_at: str
    date_key: Optional[str]
    title: str
    amount: Decimal
    is_refunded: bool = False
    item_types: tuple = field(default_factory=tuple)

    @property
    def is_deposit(self) -> bool:
        return is_deposit(self.title, self.item_types)

    @property
    def is_reversed(self) -> bool:
        return self.is_refunded


def normalize_date_key(raw, tz_name: Optional[str] = None) -> Optional[str]:
    """
    Normalize a billing timestamp to a ``YYYY-MM-DD`` key.

    Accepts ``YYYY-MM-DD[ HH:MM[:SS]]`` (ISO, optionally with an offset) and
    ``DD.MM.YYYY[ HH:MM[:SS]]``. Timestamps with an explicit offset are
    converted to the rewards timezone; naive ones are already wall time there.
    """
    if not raw:
        return None
    s = str(raw).strip()

    m = ISO_DATE_RE.match(s)
    if m:
        try:
            parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None and parsed.tzinfo is not None:
            tz = ZoneInfo(tz_name or settings.REWARDS_TIMEZONE)
            return parsed.astimezone(tz).date().isoformat()
        return f"{m.group(1)}-{m.group(2)}-{m.group(3)}"

    m = DOTTED_DATE_RE.match(s)
    if m:
        return f"{m.group(3)}-{m.group(2)}-{m.group(1)}"

    return None


def is_deposit(title, item_types: Iterable[str] = (), markers: Optional[Iterable[str]] = None) -> bool:
    if any(str(t).upper() == DEPOSIT_ITEM_TYPE for t in item_types if t):
        return True
    if markers is None:
        markers = settings.BILLING_DEPOSIT_TITLE_MARKERS
    text = str(title or "").casefold()
    return any(marker.casefold() in text for marker in markers if marker)


def to_amount(*candidates) -> Decimal:
    # first value that parses and is non-zero wins (billing fills either sum or amount)
    for value in candidates:
        if value is None or value == "":
            continue
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            continue
        if amount.is_finite() and amount != 0:
            return amount
    return Decimal("0")


def parse_payment(row: dict) -> Payment:
    items = row.get("items") or []
    item_types = tuple(str(i.get("type") or "") for i in items if isinstance(i, dict))
    created_at = str(row.get("created_at") or "")
    return Payment(
        created_at=created_at,
        date_key=normalize_date_key(created_at),
        title=str(row.get("title") or ""),
        amount=to_amount(row.get("sum"), row.get("amount")),
        is_refunded=bool(row.get("is_refunded")),
        item_types=item_types,
    )
