from rest_framework.permissions import BasePermission

from .authentication import ClientPrincipal


class HasClientSession(BasePermission):
    message = "Bearer session token required"

    def has_permission(self, request, view):
        return isinstance(request.user, ClientPrincipal)
