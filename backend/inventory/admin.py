# inventory/admin.py
from django.contrib import admin
from .models import InventoryEntry, RedemptionRequest


@admin.register(InventoryEntry)
class InventoryEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "user_uuid", "title", "item_type", "amount", "sell_price", "status", "created_at")
    list_filter = ("status", "item_type", "rarity")
    search_fields = ("user_uuid", "title")
    readonly_fields = ("spin", "created_at", "updated_at")

@admin.register(RedemptionRequest)
class RedemptionRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "user_uuid", "item_title", "item_type", "trade_link", "status", "created_at", "resolved_at")
    list_filter = ("status", "item_type")
    search_fields = ("id", "user_uuid", "item_title")
    readonly_fields = ("inventory", "created_at", "updated_at", "resolved_at")
