# core/errors.py
"""
Domain errors shared by every app.

Each error carries a stable machine-readable ``code`` and the HTTP status the
API answers with. Views never build error payloads by hand: they raise one of
these and ``core.exceptions.api_exception_handler`` renders it.
"""
from rest_framework import status


class RewardsError(Exception):
    code = "ERROR"
    message = "Request failed"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None, code=None, status_code=None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def as_dict(self):
        return {"ok": False, "error": self.code, "message": self.message}


# ---------------------------------------------------
# AUTH / UPSTREAM
# ---------------------------------------------------
class AuthFailed(RewardsError):
    code = "AUTH_FAILED"
    message = "Billing authentication failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidCredentials(AuthFailed):
    code = "INVALID_CREDENTIALS"
    message = "Invalid login or password"


class UpstreamError(RewardsError):
    code = "UPSTREAM_ERROR"
    message = "Billing service is unavailable"
    status_code = status.HTTP_502_BAD_GATEWAY


# ---------------------------------------------------
# CASES
# ---------------------------------------------------
class CaseNotFound(RewardsError):
    code = "CASE_NOT_FOUND"
    message = "Case not found"
    status_code = status.HTTP_404_NOT_FOUND


class AlreadyOpened(RewardsError):
    code = "ALREADY_OPENED"
    message = "Case already opened in this period"
    status_code = status.HTTP_409_CONFLICT


class NotEnoughDeposit(RewardsError):
    code = "NOT_ENOUGH_DEPOSIT"
    message = "Not enough deposit to open this case"
    status_code = status.HTTP_403_FORBIDDEN


class CaseEmpty(RewardsError):
    code = "CASE_EMPTY"
    message = "Case has no prizes to draw from"
    status_code = status.HTTP_409_CONFLICT


class OpenFailed(RewardsError):
    code = "OPEN_FAILED"
    message = "Case could not be opened, nothing was granted"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ItemNotFound(RewardsError):
    code = "ITEM_NOT_FOUND"
    message = "Item not found"
    status_code = status.HTTP_404_NOT_FOUND


# ---------------------------------------------------
# INVENTORY / REDEMPTION
# ---------------------------------------------------
class InventoryNotFound(RewardsError):
    code = "INVENTORY_NOT_FOUND"
    message = "Inventory entry not found"
    status_code = status.HTTP_404_NOT_FOUND


class NotAvailable(RewardsError):
    code = "NOT_AVAILABLE"
    message = "Inventory entry is not available"
    status_code = status.HTTP_409_CONFLICT


class CannotSellMoney(RewardsError):
    code = "CANNOT_SELL_MONEY"
    message = "Money prizes cannot be sold"
    status_code = status.HTTP_400_BAD_REQUEST


class TradeLinkMissing(RewardsError):
    code = "TRADE_LINK_MISSING"
    message = "Set a trade link before claiming this prize"
    status_code = status.HTTP_400_BAD_REQUEST


class RequestNotFound(RewardsError):
    code = "REQUEST_NOT_FOUND"
    message = "Redemption request not found"
    status_code = status.HTTP_404_NOT_FOUND


class RequestNotPending(RewardsError):
    code = "REQUEST_NOT_PENDING"
    message = "Redemption request is already resolved"
    status_code = status.HTTP_409_CONFLICT
