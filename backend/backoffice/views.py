# backoffice/views.py
"""Operator API: catalog management and redemption review (Django staff only)."""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.authentication import SessionAuthentication, TokenAuthentication
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from cases import catalog
from inventory import services
from inventory.models import RedemptionRequest
from inventory.serializers import RedemptionRequestOut
from .serializers import CaseAdminOut, CaseIn, ItemIn, ItemOut, ResolveRequestIn

logger = logging.getLogger(__name__)

OPERATOR_AUTH = [TokenAuthentication, SessionAuthentication]


def _case_payload(data, case_id=None):
    serializer = CaseIn(data={**data, "id": case_id} if case_id else data)
    serializer.is_valid(raise_exception=True)
    validated = dict(serializer.validated_data)
    contents = validated.pop("contents")
    return validated, contents


# =====================================================
# ITEMS
# =====================================================

@api_view(["GET", "POST"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def items(request):
    if request.method == "GET":
        return Response({"ok": True, "items": ItemOut(catalog.list_items(), many=True).data})

    serializer = ItemIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    item = catalog.upsert_item(serializer.validated_data)
    logger.info("Operator %s saved item %s", request.user, item.pk)
    return Response({"ok": True, "item": ItemOut(item).data}, status=status.HTTP_201_CREATED)


@api_view(["DELETE"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def item_detail(request, item_id):
    unlinked = catalog.delete_item(item_id)
    logger.info("Operator %s deleted item %s", request.user, item_id)
    return Response({"ok": True, "unlinked": unlinked})


# =====================================================
# CASES
# =====================================================

@api_view(["GET", "POST"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def cases(request):
    if request.method == "GET":
        return Response({"ok": True, "cases": CaseAdminOut(catalog.list_cases(), many=True).data})

    data, contents = _case_payload(request.data)
    case = catalog.upsert_case(data, contents)
    logger.info("Operator %s saved case %s", request.user, case.pk)
    return Response({"ok": True, "case": CaseAdminOut(case).data}, status=status.HTTP_201_CREATED)


@api_view(["PUT", "DELETE"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def case_detail(request, case_id):
    if request.method == "DELETE":
        deleted = catalog.delete_case(case_id)
        logger.info("Operator %s removed case %s (hard=%s)", request.user, case_id, deleted)
        return Response({"ok": True, "deleted": deleted, "deactivated": not deleted})

    catalog.get_case(case_id, active_only=False)
    data, contents = _case_payload(request.data, case_id=case_id)
    case = catalog.upsert_case(data, contents)
    logger.info("Operator %s updated case %s", request.user, case.pk)
    return Response({"ok": True, "case": CaseAdminOut(case).data})


# =====================================================
# REDEMPTION REQUESTS
# =====================================================

@api_view(["GET"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def requests_list(request):
    wanted = request.query_params.get("status") or None
    valid = {choice for choice, _ in RedemptionRequest.STATUS_CHOICES}
    if wanted and wanted not in valid:
        wanted = None
    rows = services.list_redemption_requests(status=wanted)
    return Response({"ok": True, "requests": RedemptionRequestOut(rows, many=True).data})


def _resolve(request, request_id, action):
    serializer = ResolveRequestIn(data=request.data)
    serializer.is_valid(raise_exception=True)
    comment = serializer.validated_data.get("comment")

    if action == "deny":
        req = services.deny(request_id, comment or "")
    elif action == "return":
        req = services.return_request(request_id, comment)
    else:
        req = services.approve(request_id, comment)

    logger.info("Operator %s %s request %s", request.user, action, request_id)
    return Response({"ok": True, "request": RedemptionRequestOut(req).data})


@api_view(["POST"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def approve_request(request, request_id):
    return _resolve(request, request_id, "approve")


@api_view(["POST"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def deny_request(request, request_id):
    return _resolve(request, request_id, "deny")


@api_view(["POST"])
@authentication_classes(OPERATOR_AUTH)
@permission_classes([IsAdminUser])
def return_request(request, request_id):
    return _resolve(request, request_id, "return")
