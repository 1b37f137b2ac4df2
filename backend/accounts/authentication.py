# accounts/authentication.py
from dataclasses import dataclass

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from .sessions import lookup_session, touch_session

KEYWORD = "Bearer"


@dataclass
class ClientPrincipal:
    """``request.user`` for bearer-authenticated club clients."""

    uuid: str
    nickname: str

    is_authenticated = True
    is_staff = False
    is_anonymous = False

    def __str__(self):
        return self.nickname or self.uuid


class ClientSessionAuthentication(BaseAuthentication):
    """
    ``Authorization: Bearer <session_token>``.

    No header -> anonymous (the permission check answers ``NO_SESSION``).
    Unknown or expired token -> 401 ``INVALID_SESSION``.
    """

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != KEYWORD.lower().encode():
            return None

        if len(auth) != 2:
            raise exceptions.AuthenticationFailed("Malformed bearer token", code="invalid_session")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Malformed bearer token", code="invalid_session")

        session = lookup_session(token)
        if session is None:
            raise exceptions.AuthenticationFailed("Session is invalid or expired", code="invalid_session")

        touch_session(session)
        return ClientPrincipal(uuid=session.user_uuid, nickname=session.nickname), session

    def authenticate_header(self, request):
        return KEYWORD
