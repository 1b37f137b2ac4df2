# accounts/sessions.py
import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import ClientSession

logger = logging.getLogger(__name__)


def _token_expiry(tokens, now):
    expires_in = getattr(tokens, "expires_in", 0) or 0
    return now + timedelta(seconds=expires_in) if expires_in else None


@transaction.atomic
def create_session(user_uuid, nickname, tokens=None, now=None):
    """
    Issue a fresh session for ``user_uuid``.

    Every older session of the same user is dropped first, so a user has at
    most one live token.
    """
    now = now or timezone.now()
    dropped = invalidate_user_sessions(user_uuid)
    if dropped:
        logger.info("Dropped %s previous session(s) for %s", dropped, user_uuid)

    return ClientSession.objects.create(
        user_uuid=user_uuid,
        nickname=nickname or "",
        last_seen_at=now,
        expires_at=now + timedelta(seconds=settings.SESSION_TTL_SECONDS),
        client_access_token=getattr(tokens, "access_token", "") or "",
        client_refresh_token=getattr(tokens, "refresh_token", "") or "",
        client_token_expires_at=_token_expiry(tokens, now),
    )


def lookup_session(token, now=None):
    """Return the live session for ``token``; expired sessions are deleted and treated as unknown."""
    if not token:
        return None
    session = ClientSession.objects.filter(token=token).first()
    if session is None:
        return None
    if session.is_expired(now):
        logger.info("Session for %s expired at %s", session.user_uuid, session.expires_at)
        session.delete()
        return None
    return session


def touch_session(session, now=None):
    session.last_seen_at = now or timezone.now()
    ClientSession.objects.filter(token=session.token).update(last_seen_at=session.last_seen_at)


def invalidate_user_sessions(user_uuid):
    deleted, _ = ClientSession.objects.filter(user_uuid=user_uuid).delete()
    return deleted


def end_session(token):
    deleted, _ = ClientSession.objects.filter(token=token).delete()
    return bool(deleted)


def store_client_tokens(session, tokens, now=None):
    now = now or timezone.now()
    session.client_access_token = tokens.access_token
    session.client_refresh_token = tokens.refresh_token or session.client_refresh_token
    session.client_token_expires_at = _token_expiry(tokens, now)
    session.save(update_fields=["client_access_token", "client_refresh_token", "client_token_expires_at"])


def purge_expired_sessions(now=None):
    deleted, _ = ClientSession.objects.filter(expires_at__lte=now or timezone.now()).delete()
    return deleted
