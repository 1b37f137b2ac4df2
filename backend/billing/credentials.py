# billing/credentials.py
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_SECONDS = 60


@dataclass
class CachedToken:
    value: str
    expires_at: float


class ServiceTokenCache:
    """
    Process-wide holder for the club-level billing token.

    ``fetch`` returns ``(access_token, expires_in_seconds)``. The token is
    treated as expired ``margin`` seconds early and refreshed lazily on the
    next ``get()``. Refresh runs under a lock and re-checks expiry once the
    lock is held, so concurrent callers that all saw an expired token cause
    a single upstream login.
    """

    def __init__(
        self,
        fetch: Callable[[], Tuple[str, float]],
        clock: Callable[[], float] = time.time,
        margin: float = EXPIRY_MARGIN_SECONDS,
    ):
        self._fetch = fetch
        self._clock = clock
        self._margin = margin
        self._token: Optional[CachedToken] = None
        self._lock = threading.Lock()

    def _valid(self, token: Optional[CachedToken]) -> bool:
        return token is not None and self._clock() < token.expires_at

    def get(self) -> str:
        token = self._token
        if self._valid(token):
            return token.value

        with self._lock:
            token = self._token
            if self._valid(token):
                return token.value

            value, expires_in = self._fetch()
            self._token = CachedToken(
                value=value,
                expires_at=self._clock() + max(float(expires_in) - self._margin, 0.0),
            )
            logger.info("Billing service token refreshed, valid for %ss", int(float(expires_in) - self._margin))
            return value

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    @property
    def expires_at(self) -> Optional[float]:
        token = self._token
        return token.expires_at if token else None
