# billing/client.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

import requests
from django.conf import settings
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from core.errors import InvalidCredentials, UpstreamError
from .credentials import ServiceTokenCache
from .payments import Payment, parse_payment, to_amount

logger = logging.getLogger(__name__)


class BillingError(UpstreamError):
    """Any failure talking to SmartShell (transport, HTTP status, GraphQL errors)."""


class GraphQLRejected(BillingError):
    message = "Billing service rejected the request"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []


class BillingUnauthorized(GraphQLRejected):
    """The bearer token sent with the call was refused."""

    message = "Billing service refused the token"


AUTH_ERROR_MARKERS = ("unauthenticated", "unauthorized", "unauthorised", "invalid token", "token expired")


def _is_auth_error(errors):
    for error in errors:
        if not isinstance(error, dict):
            continue
        extensions = error.get("extensions") if isinstance(error.get("extensions"), dict) else {}
        text = f"{error.get('message', '')} {extensions.get('code', '')} {extensions.get('category', '')}".casefold()
        if any(marker in text for marker in AUTH_ERROR_MARKERS):
            return True
    return False


def _section(data, key):
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise BillingError("Invalid response from billing service")
    return value


@dataclass(frozen=True)
class ClientTokens:
    access_token: str
    refresh_token: str
    expires_in: int = 0


@dataclass(frozen=True)
class ClientProfile:
    uuid: str
    nickname: str
    deposit: Decimal


# ---------------------------------------------------
# GRAPHQL DOCUMENTS
# ---------------------------------------------------
CLIENT_LOGIN = """
mutation ClientLogin($input: ClientLoginInput!) {
  clientLogin(input: $input) { access_token refresh_token expires_in }
}
"""

CLIENT_REFRESH = """
mutation ClientRefreshToken($input: ClientRefreshTokenInput!) {
  clientRefreshToken(input: $input) { access_token refresh_token expires_in }
}
"""

CLIENT_ME = """
query ClientMe { clientMe { uuid nickname deposit } }
"""

CLUB_LOGIN = """
mutation Login($input: LoginInput!) {
  login(input: $input) { access_token expires_in }
}
"""

PAYMENTS_BY_CLIENT = """
query GetPayments($uuid: String!, $first: Int!) {
  getPaymentsByClientId(uuid: $uuid, page: 1, first: $first) {
    data { created_at title sum amount is_refunded items { type } }
  }
}
"""


class SmartShellClient:
    """
    SmartShell GraphQL integration.

    Every call is a POST of ``{query, variables}`` to a single endpoint with
    a bounded ``(connect, read)`` timeout. Failures raise ``BillingError``;
    callers on read paths decide what the safe default is.
    """

    def __init__(self, api_url=None, club_id=None, login=None, password=None, session=None, clock=None):
        self.api_url = api_url or settings.SMARTSHELL_API_URL
        self.club_id = club_id if club_id is not None else settings.SMARTSHELL_CLUB_ID
        self.club_login = login if login is not None else settings.SMARTSHELL_LOGIN
        self.club_password = password if password is not None else settings.SMARTSHELL_PASSWORD

        self.connect_timeout = settings.SMARTSHELL_CONNECT_TIMEOUT
        self.read_timeout = settings.SMARTSHELL_READ_TIMEOUT
        self.max_retries = settings.SMARTSHELL_MAX_RETRIES
        self.verify_ssl = settings.SMARTSHELL_VERIFY_SSL

        self.session = session or self._create_session()

        cache_kwargs = {"clock": clock} if clock is not None else {}
        self.service_tokens = ServiceTokenCache(self._club_login, **cache_kwargs)

    def _create_session(self):
        """Create a requests session with retry strategy"""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            status_forcelist=[502, 503, 504],
            allowed_methods=["POST"],
            backoff_factor=0.3,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=4, pool_maxsize=10)

        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def _headers(self, token=None):
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-club-id": str(self.club_id),
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    # ---------------------------------------------------
    # LOW-LEVEL GRAPHQL POST
    # ---------------------------------------------------
    def _post(self, query, variables=None, token=None):
        try:
            response = self.session.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
                headers=self._headers(token),
                timeout=(self.connect_timeout, self.read_timeout),
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as exc:
            logger.error("SmartShell timeout: %s", exc)
            raise BillingError("Billing service timed out") from exc
        except requests.exceptions.RequestException as exc:
            logger.error("SmartShell request error: %s", exc)
            raise BillingError() from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("SmartShell returned non-JSON (status %s): %s", response.status_code, response.text[:300])
            raise BillingError("Invalid response from billing service") from exc

        if response.status_code in (401, 403):
            logger.warning("SmartShell HTTP %s: token refused", response.status_code)
            raise BillingUnauthorized()

        if not 200 <= response.status_code < 300:
            logger.error("SmartShell HTTP %s: %s", response.status_code, str(payload)[:600])
            raise BillingError(f"Billing service answered HTTP {response.status_code}")

        if not isinstance(payload, dict):
            logger.error("SmartShell returned a non-object body: %s", str(payload)[:300])
            raise BillingError("Invalid response from billing service")

        errors = payload.get("errors")
        if errors:
            logger.warning("SmartShell GraphQL errors: %s", str(errors)[:900])
            errors = errors if isinstance(errors, list) else [errors]
            if _is_auth_error(errors):
                raise BillingUnauthorized(errors=errors)
            raise GraphQLRejected(errors=errors)

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise BillingError("Invalid response from billing service")
        return data

    # ---------------------------------------------------
    # CLIENT AUTH
    # ---------------------------------------------------
    def authenticate(self, login, password) -> ClientTokens:
        try:
            data = self._post(CLIENT_LOGIN, {"input": {"login": login, "password": password}})
        except GraphQLRejected as exc:
            raise InvalidCredentials() from exc

        tokens = _section(data, "clientLogin")
        if not tokens.get("access_token"):
            raise InvalidCredentials()
        return ClientTokens(
            access_token=tokens["access_token"],
            refresh_token=tokens.get("refresh_token") or "",
            expires_in=int(tokens.get("expires_in") or 0),
        )

    def refresh_client_token(self, refresh_token) -> ClientTokens:
        data = self._post(CLIENT_REFRESH, {"input": {"refresh_token": refresh_token}})
        tokens = _section(data, "clientRefreshToken")
        if not tokens.get("access_token"):
            raise BillingError("Billing token refresh failed")
        return ClientTokens(
            access_token=tokens["access_token"],
            refresh_token=tokens.get("refresh_token") or refresh_token,
            expires_in=int(tokens.get("expires_in") or 0),
        )

    def fetch_profile(self, access_token) -> ClientProfile:
        data = self._post(CLIENT_ME, token=access_token)
        me = _section(data, "clientMe")
        if not me.get("uuid"):
            raise BillingError("Billing profile is missing uuid")
        return ClientProfile(
            uuid=str(me["uuid"]),
            nickname=me.get("nickname") or "",
            deposit=to_amount(me.get("deposit")),
        )

    # ---------------------------------------------------
    # CLUB (SERVICE) AUTH
    # ---------------------------------------------------
    def _club_login(self):
        if not self.club_login or not self.club_password:
            raise BillingError("SMARTSHELL_LOGIN / SMARTSHELL_PASSWORD are not set")

        data = self._post(
            CLUB_LOGIN,
            {
                "input": {
                    "login": self.club_login,
                    "password": self.club_password,
                    "company_id": self.club_id,
                }
            },
        )
        login = _section(data, "login")
        if not login.get("access_token"):
            raise BillingError("Billing club login failed")
        return login["access_token"], float(login.get("expires_in") or 0)

    def fetch_service_token(self) -> str:
        return self.service_tokens.get()

    # ---------------------------------------------------
    # PAYMENTS
    # ---------------------------------------------------
    def _payments_page(self, uuid, token):
        data = self._post(
            PAYMENTS_BY_CLIENT,
            {"uuid": uuid, "first": settings.SMARTSHELL_PAYMENTS_PAGE_SIZE},
            token=token,
        )
        rows = _section(data, "getPaymentsByClientId").get("data") or []
        if not isinstance(rows, list):
            raise BillingError("Invalid response from billing service")
        return rows

    def fetch_recent_payments(self, uuid, service_token=None) -> list[Payment]:
        """
        Payment history for a client, read with the club token.

        A refused cached token is dropped and the call retried once with a
        fresh club login.
        """
        if service_token:
            rows = self._payments_page(uuid, service_token)
        else:
            try:
                rows = self._payments_page(uuid, self.fetch_service_token())
            except BillingUnauthorized:
                logger.warning("Billing service token refused, logging in again")
                self.service_tokens.invalidate()
                rows = self._payments_page(uuid, self.fetch_service_token())
        return [parse_payment(row) for row in rows if isinstance(row, dict)]


@lru_cache(maxsize=1)
def get_billing_client() -> SmartShellClient:
    """Shared client so the service-token cache lives for the whole process."""
    return SmartShellClient()
