# backoffice/serializers.py
from decimal import Decimal

from rest_framework import serializers

from cases.catalog import list_case_contents
from cases.models import Case, Item


class ItemIn(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    type = serializers.ChoiceField(choices=Item.TYPE_CHOICES)
    title = serializers.CharField(max_length=200)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    display_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False)
    sell_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"), required=False)
    rarity = serializers.CharField(max_length=32, required=False)
    stock = serializers.IntegerField(min_value=Item.UNLIMITED_STOCK, required=False)
    is_active = serializers.BooleanField(required=False)


class ItemOut(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = (
            "id", "type", "title", "image_url", "display_price", "sell_price",
            "rarity", "stock", "is_active", "created_at", "updated_at",
        )


class CaseContentIn(serializers.Serializer):
    item_id = serializers.CharField(max_length=64)
    weight = serializers.FloatField(min_value=0)
    rarity = serializers.CharField(max_length=32, required=False, allow_blank=True)


class CaseIn(serializers.Serializer):
    id = serializers.SlugField(max_length=64)
    title = serializers.CharField(max_length=200)
    type = serializers.ChoiceField(choices=Case.TYPE_CHOICES)
    threshold = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
    sort_order = serializers.IntegerField(required=False)
    contents = CaseContentIn(many=True)

    def validate_contents(self, value):
        ids = [row["item_id"] for row in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Each item may appear only once per case.")
        return value


class CaseContentAdminOut(serializers.Serializer):
    item_id = serializers.CharField(source="item.id")
    title = serializers.CharField(source="item.title")
    weight = serializers.FloatField()
    rarity = serializers.CharField()


class CaseAdminOut(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    type = serializers.CharField()
    threshold = serializers.DecimalField(max_digits=12, decimal_places=2)
    image_url = serializers.CharField()
    is_active = serializers.BooleanField()
    sort_order = serializers.IntegerField()
    contents = serializers.SerializerMethodField()

    def get_contents(self, case):
        return CaseContentAdminOut(list_case_contents(case), many=True).data


class ResolveRequestIn(serializers.Serializer):
    comment = serializers.CharField(max_length=1000, required=False, allow_blank=True)
