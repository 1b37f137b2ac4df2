# cases/serializers.py
from __future__ import annotations
from rest_framework import serializers


class OpenCaseIn(serializers.Serializer):
    case_id = serializers.SlugField(max_length=64)


class CaseOut(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    type = serializers.CharField()
    threshold = serializers.DecimalField(max_digits=12, decimal_places=2)
    image_url = serializers.CharField()


class CaseContentOut(serializers.Serializer):
    item_id = serializers.CharField(source="item.id")
    title = serializers.CharField(source="item.title")
    type = serializers.CharField(source="item.type")
    image_url = serializers.CharField(source="item.image_url")
    display_price = serializers.DecimalField(source="item.display_price", max_digits=12, decimal_places=2)
    rarity = serializers.CharField()
    weight = serializers.FloatField()
    drawable = serializers.BooleanField()
    chance = serializers.FloatField()


class CaseDetailOut(CaseOut):
    total_weight = serializers.FloatField()
    contents = CaseContentOut(many=True)


class CaseStatusOut(serializers.Serializer):
    id = serializers.CharField(source="case.id")
    title = serializers.CharField(source="case.title")
    type = serializers.CharField(source="case.type")
    threshold = serializers.DecimalField(source="case.threshold", max_digits=12, decimal_places=2)
    image_url = serializers.CharField(source="case.image_url")
    progress = serializers.DecimalField(max_digits=12, decimal_places=2)
    available = serializers.BooleanField()
    is_claimed = serializers.BooleanField()
    state = serializers.CharField()
    period_key = serializers.CharField()


class PrizeOut(serializers.Serializer):
    title = serializers.CharField()
    type = serializers.CharField()
    image_url = serializers.CharField()
    rarity = serializers.CharField()
    value = serializers.DecimalField(max_digits=12, decimal_places=2)
    sell_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_id = serializers.CharField()
    inventory_id = serializers.IntegerField()
    inventory_status = serializers.CharField()
    spin_id = serializers.IntegerField()
    case_id = serializers.CharField()
    period_key = serializers.CharField()


class DropOut(serializers.Serializer):
    id = serializers.IntegerField()
    nickname = serializers.CharField()
    case_id = serializers.CharField(allow_null=True)
    case_title = serializers.CharField()
    prize_title = serializers.CharField()
    prize_type = serializers.CharField()
    prize_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    rarity = serializers.CharField()
    image_url = serializers.CharField()
    created_at = serializers.DateTimeField()


class PublicStatsOut(serializers.Serializer):
    total_spins = serializers.IntegerField()
    total_players = serializers.IntegerField()
    total_prize_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    spins_today = serializers.IntegerField()
    active_cases = serializers.IntegerField()
