# cases/progress.py
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

import requests

from billing.client import BillingError, get_billing_client
from .periods import day_key, month_key

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def q2(x: Decimal) -> Decimal:
    return x.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Progress:
    daily: Decimal = Decimal("0.00")
    monthly: Decimal = Decimal("0.00")

    def for_case_type(self, case_type):
        return self.monthly if case_type == "monthly" else self.daily


def sum_deposits(payments, now=None) -> Progress:
    """
    Bucket deposit payments into today / this month (rewards timezone).
    Non-deposits, reversed payments and non-positive amounts are ignored.
    """
    today = day_key(now)
    this_month = month_key(now)

    daily = Decimal("0")
    monthly = Decimal("0")
    for p in payments:
        if not p.is_deposit or p.is_reversed:
            continue
        if p.amount <= 0 or not p.date_key:
            continue
        if p.date_key == today:
            daily += p.amount
        if p.date_key.startswith(this_month):
            monthly += p.amount

    return Progress(daily=q2(daily), monthly=q2(monthly))


def compute_progress(user_uuid, client=None, now=None) -> Progress:
    """
    Deposit totals for ``user_uuid``. Fails closed: any billing problem
    yields zero progress so nothing becomes unlockable.
    """
    client = client or get_billing_client()
    try:
        payments = client.fetch_recent_payments(user_uuid)
    except (BillingError, requests.exceptions.RequestException) as exc:
        logger.warning("Progress for %s unavailable, using zero: %s", user_uuid, exc)
        return Progress()

    return sum_deposits(payments, now=now)
