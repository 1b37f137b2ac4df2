# inventory/serializers.py
from rest_framework import serializers


class InventoryActionIn(serializers.Serializer):
    inventory_id = serializers.IntegerField(min_value=1)


class InventoryEntryOut(serializers.Serializer):
    id = serializers.IntegerField()
    item_id = serializers.CharField(allow_null=True)
    title = serializers.CharField()
    type = serializers.CharField(source="item_type")
    image_url = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    sell_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    rarity = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class RedemptionRequestOut(serializers.Serializer):
    id = serializers.CharField()
    user_uuid = serializers.CharField()
    inventory_id = serializers.IntegerField()
    item_title = serializers.CharField()
    type = serializers.CharField(source="item_type")
    trade_link = serializers.CharField()
    status = serializers.CharField()
    admin_comment = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    resolved_at = serializers.DateTimeField(allow_null=True)


class SellOut(serializers.Serializer):
    inventory_id = serializers.IntegerField()
    status = serializers.CharField()
    sold_amount = serializers.DecimalField(max_digits=12, decimal_places=2)


class ClaimOut(serializers.Serializer):
    inventory_id = serializers.IntegerField(source="entry.id")
    status = serializers.CharField(source="entry.status")
    request = RedemptionRequestOut(allow_null=True)
    credited_amount = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
