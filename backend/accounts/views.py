# accounts/views.py
from __future__ import annotations

import logging
from decimal import Decimal

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from billing.client import BillingError, get_billing_client
from cases.engine import CaseEngine
from cases.periods import seconds_until_daily_reset, seconds_until_monthly_reset
from core.errors import AuthFailed, InvalidCredentials
from .models import UserSettings
from .permissions import HasClientSession
from .serializers import (
    MeOut,
    SessionIn,
    SessionOut,
    TradeLinkIn,
    UserSettingsOut,
)
from .sessions import create_session, end_session, store_client_tokens

logger = logging.getLogger(__name__)


def _settings_for(user_uuid):
    settings_row, _ = UserSettings.objects.get_or_create(user_uuid=user_uuid)
    return settings_row


def _live_deposit(client, session, now=None) -> Decimal:
    """
    Current balance from billing; one refresh attempt, then zero.

    A client token past its known expiry is refreshed up front instead of
    being sent first.
    """
    if not session.client_access_token:
        return Decimal("0.00")

    if not (session.client_refresh_token and session.client_token_stale(now)):
        try:
            return client.fetch_profile(session.client_access_token).deposit
        except BillingError as exc:
            if not session.client_refresh_token:
                logger.warning("Deposit for %s unavailable: %s", session.user_uuid, exc)
                return Decimal("0.00")

    try:
        tokens = client.refresh_client_token(session.client_refresh_token)
        store_client_tokens(session, tokens)
        return client.fetch_profile(tokens.access_token).deposit
    except BillingError as exc:
        logger.warning("Deposit for %s unavailable after refresh: %s", session.user_uuid, exc)
        return Decimal("0.00")


# =====================================================
# AUTH
# =====================================================

@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    serializer = SessionIn(data=request.data)
    serializer.is_valid(raise_exception=True)

    client = get_billing_client()
    try:
        tokens = client.authenticate(
            serializer.validated_data["login"],
            serializer.validated_data["password"],
        )
        profile = client.fetch_profile(tokens.access_token)
    except InvalidCredentials:
        logger.info("Login rejected for %s", serializer.validated_data["login"])
        raise
    except BillingError as exc:
        logger.warning("Login failed, billing unavailable: %s", exc)
        raise AuthFailed("Billing service is unavailable") from exc

    session = create_session(profile.uuid, profile.nickname, tokens=tokens)
    logger.info("Session opened for %s", profile.uuid)

    out = SessionOut({
        "session_token": session.token,
        "expires_at": session.expires_at,
        "user": profile,
    })
    return Response({"ok": True, **out.data})


@api_view(["POST"])
@permission_classes([HasClientSession])
def logout_view(request):
    end_session(request.auth.token)
    return Response({"ok": True})


# =====================================================
# PROFILE
# =====================================================

@api_view(["GET"])
@permission_classes([HasClientSession])
def me_view(request):
    principal = request.user
    engine = CaseEngine()

    deposit = _live_deposit(get_billing_client(), request.auth)
    progress = engine.progress_for(principal.uuid)

    out = MeOut({
        "uuid": principal.uuid,
        "nickname": principal.nickname,
        "deposit": deposit,
        "progress": progress,
        "timers": {
            "daily_reset_seconds": seconds_until_daily_reset(),
            "monthly_reset_seconds": seconds_until_monthly_reset(),
        },
        "settings": _settings_for(principal.uuid),
        "cases": engine.case_statuses(principal.uuid, progress),
    })
    return Response({"ok": True, "user": out.data})


@api_view(["GET"])
@permission_classes([HasClientSession])
def settings_view(request):
    return Response({"ok": True, "settings": UserSettingsOut(_settings_for(request.user.uuid)).data})


@api_view(["POST"])
@permission_classes([HasClientSession])
def update_trade_link(request):
    serializer = TradeLinkIn(data=request.data)
    serializer.is_valid(raise_exception=True)

    settings_row, _ = UserSettings.objects.update_or_create(
        user_uuid=request.user.uuid,
        defaults={"trade_link": serializer.validated_data["trade_link"]},
    )
    return Response({"ok": True, "settings": UserSettingsOut(settings_row).data})
