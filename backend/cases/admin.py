# cases/admin.py
from django.contrib import admin
from .models import Item, Case, CaseItem, CaseClaim, Spin


class CaseItemInline(admin.TabularInline):
    model = CaseItem
    extra = 1
    autocomplete_fields = ("item",)


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "type", "display_price", "sell_price", "rarity", "stock", "is_active", "updated_at")
    list_editable = ("display_price", "sell_price", "stock", "is_active")
    list_filter = ("type", "rarity", "is_active")
    search_fields = ("id", "title")

@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "type", "threshold", "sort_order", "is_active", "updated_at")
    list_editable = ("threshold", "sort_order", "is_active")
    list_filter = ("type", "is_active")
    search_fields = ("id", "title")
    inlines = [CaseItemInline]

@admin.register(CaseClaim)
class CaseClaimAdmin(admin.ModelAdmin):
    list_display = ("user_uuid", "case", "period_key", "claimed_at")
    list_filter = ("case", "period_key")
    search_fields = ("user_uuid",)

@admin.register(Spin)
class SpinAdmin(admin.ModelAdmin):
    list_display = ("id", "user_uuid", "nickname", "case_title", "prize_title", "prize_type", "prize_amount", "rarity", "created_at")
    list_filter = ("prize_type", "rarity", "case")
    search_fields = ("user_uuid", "nickname", "prize_title")
    readonly_fields = ("created_at",)
