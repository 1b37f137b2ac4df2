# core/exceptions.py
import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .errors import RewardsError

logger = logging.getLogger(__name__)


def _error(code, message, status_code, **extra):
    payload = {"ok": False, "error": code, "message": message}
    payload.update(extra)
    return Response(payload, status=status_code)


def api_exception_handler(exc, context):
    """
    DRF ``EXCEPTION_HANDLER``: every error leaves the API as
    ``{"ok": false, "error": CODE, "message": ...}``.
    """
    if isinstance(exc, RewardsError):
        return Response(exc.as_dict(), status=exc.status_code)

    if isinstance(exc, exceptions.ValidationError):
        return _error(
            "VALIDATION_ERROR",
            "Invalid request data",
            status.HTTP_400_BAD_REQUEST,
            details=exc.detail,
        )

    if isinstance(exc, exceptions.NotAuthenticated):
        return _error("NO_SESSION", str(exc.detail), status.HTTP_401_UNAUTHORIZED)

    if isinstance(exc, exceptions.AuthenticationFailed):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else "INVALID_SESSION"
        return _error(code.upper(), str(exc.detail), status.HTTP_401_UNAUTHORIZED)

    if isinstance(exc, exceptions.PermissionDenied):
        return _error("FORBIDDEN", str(exc.detail), status.HTTP_403_FORBIDDEN)

    response = exception_handler(exc, context)
    if response is not None:
        code = getattr(exc, "default_code", "error")
        detail = getattr(exc, "detail", str(exc))
        response.data = {"ok": False, "error": str(code).upper(), "message": str(detail)}
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
    return _error("INTERNAL_ERROR", "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
