# inventory/credits.py
import logging
from decimal import Decimal

logger = logging.getLogger("inventory.credits")


def request_balance_credit(user_uuid, amount, reason=""):
    """
    Ask for ``amount`` to be added to the user's SmartShell wallet.

    Writing to the billing wallet is not wired up; the intent is logged so
    operators can reconcile it by hand.
    """
    amount = Decimal(str(amount))
    logger.info("BALANCE_CREDIT_REQUESTED user=%s amount=%s reason=%s", user_uuid, amount, reason)
    return amount
