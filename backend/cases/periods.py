# cases/periods.py
"""Day / month windows for cases, always computed in ``settings.REWARDS_TIMEZONE``."""
from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


def rewards_tz() -> ZoneInfo:
    return ZoneInfo(settings.REWARDS_TIMEZONE)


def local_now(now: datetime | None = None) -> datetime:
    return (now or timezone.now()).astimezone(rewards_tz())


def day_key(now: datetime | None = None) -> str:
    return local_now(now).strftime("%Y-%m-%d")


def month_key(now: datetime | None = None) -> str:
    return local_now(now).strftime("%Y-%m")


def period_key(case_type: str, now: datetime | None = None) -> str:
    if case_type == "monthly":
        return month_key(now)
    return day_key(now)


def _next_local_midnight(local: datetime, days: int) -> datetime:
    date = (local + timedelta(days=days)).date()
    return datetime(date.year, date.month, date.day, tzinfo=local.tzinfo)


def seconds_until_daily_reset(now: datetime | None = None) -> int:
    local = local_now(now)
    reset = _next_local_midnight(local, 1)
    return max(int((reset - local).total_seconds()), 0)


def seconds_until_monthly_reset(now: datetime | None = None) -> int:
    local = local_now(now)
    if local.month == 12:
        reset = datetime(local.year + 1, 1, 1, tzinfo=local.tzinfo)
    else:
        reset = datetime(local.year, local.month + 1, 1, tzinfo=local.tzinfo)
    return max(int((reset - local).total_seconds()), 0)
