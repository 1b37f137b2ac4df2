# accounts/admin.py
from django.contrib import admin
from .models import ClientSession, UserSettings


@admin.register(ClientSession)
class ClientSessionAdmin(admin.ModelAdmin):
    list_display = ("user_uuid", "nickname", "created_at", "last_seen_at", "expires_at")
    search_fields = ("user_uuid", "nickname")
    readonly_fields = ("token", "created_at", "client_access_token", "client_refresh_token", "client_token_expires_at")

@admin.register(UserSettings)
class UserSettingsAdmin(admin.ModelAdmin):
    list_display = ("user_uuid", "trade_link", "level", "xp", "updated_at")
    search_fields = ("user_uuid", "trade_link")
