# accounts/models.py
import uuid

from django.db import models
from django.utils import timezone


def generate_session_token():
    return uuid.uuid4().hex


class ClientSession(models.Model):
    """
    Local session issued after a successful SmartShell login.

    Holds the client's billing credential so later calls (profile, deposit)
    can be made on the user's behalf.
    """

    token = models.CharField(max_length=64, primary_key=True, default=generate_session_token, editable=False)
    user_uuid = models.CharField(max_length=64, db_index=True)
    nickname = models.CharField(max_length=120, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    last_seen_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(db_index=True)

    client_access_token = models.TextField(blank=True)
    client_refresh_token = models.TextField(blank=True)
    client_token_expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["user_uuid", "expires_at"], name="session_user_expiry_idx"),
        ]

    def is_expired(self, now=None):
        return (now or timezone.now()) >= self.expires_at

    def client_token_stale(self, now=None):
        # unknown expiry = trust the token until billing refuses it
        if self.client_token_expires_at is None:
            return False
        return (now or timezone.now()) >= self.client_token_expires_at

    def __str__(self):
        return f"Session({self.user_uuid}, {self.nickname or '-'})"


class UserSettings(models.Model):
    user_uuid = models.CharField(max_length=64, unique=True)
    trade_link = models.URLField(max_length=500, blank=True)
    level = models.PositiveIntegerField(default=1)
    xp = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "user settings"

    def __str__(self):
        return f"Settings({self.user_uuid})"
