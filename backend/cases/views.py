# cases/views.py
from __future__ import annotations

from datetime import datetime, time

from django.conf import settings
from django.db.models import Count, Sum

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.permissions import HasClientSession
from . import catalog
from .engine import CaseEngine
from .models import Case, Spin
from .periods import local_now
from .serializers import (
    CaseDetailOut,
    CaseOut,
    DropOut,
    OpenCaseIn,
    PrizeOut,
    PublicStatsOut,
)


def _clamp_limit(raw, default, maximum):
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return default
    return max(1, min(limit, maximum))


# =====================================================
# CATALOG (PUBLIC)
# =====================================================

@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def list_cases(request):
    cases = catalog.list_active_cases()
    return Response({"ok": True, "cases": CaseOut(cases, many=True).data})


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def case_detail(request, case_id):
    case = catalog.get_case(case_id)
    contents = catalog.list_case_contents(case)
    # odds are shown over what a draw can actually pick
    drawable = [catalog.is_drawable(c) for c in contents]
    total = sum(c.weight for c, live in zip(contents, drawable) if live)

    rows = [
        {
            "item": c.item,
            "rarity": c.rarity,
            "weight": c.weight,
            "drawable": live,
            "chance": round(c.weight / total * 100, 2) if live and total else 0.0,
        }
        for c, live in zip(contents, drawable)
    ]
    payload = {
        "id": case.id,
        "title": case.title,
        "type": case.type,
        "threshold": case.threshold,
        "image_url": case.image_url,
        "total_weight": total,
        "contents": rows,
    }
    return Response({"ok": True, "case": CaseDetailOut(payload).data})


# =====================================================
# OPEN
# =====================================================

@api_view(["POST"])
@permission_classes([HasClientSession])
def open_case(request):
    serializer = OpenCaseIn(data=request.data)
    serializer.is_valid(raise_exception=True)

    prize = CaseEngine().open_case(
        request.user.uuid,
        serializer.validated_data["case_id"],
        nickname=request.user.nickname,
    )
    return Response({"ok": True, "prize": PrizeOut(prize).data})


# =====================================================
# PUBLIC FEED
# =====================================================

@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def recent_drops(request):
    maximum = settings.RECENT_DROPS_LIMIT
    limit = _clamp_limit(request.query_params.get("limit"), 20, maximum)
    drops = Spin.objects.all()[:limit]
    return Response({"ok": True, "drops": DropOut(drops, many=True).data})


@api_view(["GET"])
@authentication_classes([])
@permission_classes([AllowAny])
def public_stats(request):
    local = local_now()
    start_of_day = datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)

    totals = Spin.objects.aggregate(
        total_spins=Count("id"),
        total_players=Count("user_uuid", distinct=True),
        total_prize_value=Sum("prize_amount"),
    )
    stats = {
        "total_spins": totals["total_spins"] or 0,
        "total_players": totals["total_players"] or 0,
        "total_prize_value": totals["total_prize_value"] or 0,
        "spins_today": Spin.objects.filter(created_at__gte=start_of_day).count(),
        "active_cases": Case.objects.filter(is_active=True).count(),
    }
    return Response({"ok": True, "stats": PublicStatsOut(stats).data})
