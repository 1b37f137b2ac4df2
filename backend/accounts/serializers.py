# accounts/serializers.py
from rest_framework import serializers

from cases.serializers import CaseStatusOut


class SessionIn(serializers.Serializer):
    login = serializers.CharField(max_length=150)
    password = serializers.CharField(max_length=256, trim_whitespace=False)


class ClientOut(serializers.Serializer):
    uuid = serializers.CharField()
    nickname = serializers.CharField(allow_blank=True)
    deposit = serializers.DecimalField(max_digits=12, decimal_places=2)


class SessionOut(serializers.Serializer):
    session_token = serializers.CharField()
    expires_at = serializers.DateTimeField()
    user = ClientOut()


class TradeLinkIn(serializers.Serializer):
    trade_link = serializers.URLField(max_length=500)


class UserSettingsOut(serializers.Serializer):
    trade_link = serializers.CharField(allow_blank=True)
    level = serializers.IntegerField()
    xp = serializers.IntegerField()


class ProgressOut(serializers.Serializer):
    daily = serializers.DecimalField(max_digits=12, decimal_places=2)
    monthly = serializers.DecimalField(max_digits=12, decimal_places=2)


class TimersOut(serializers.Serializer):
    daily_reset_seconds = serializers.IntegerField()
    monthly_reset_seconds = serializers.IntegerField()


class MeOut(serializers.Serializer):
    uuid = serializers.CharField()
    nickname = serializers.CharField(allow_blank=True)
    deposit = serializers.DecimalField(max_digits=12, decimal_places=2)
    progress = ProgressOut()
    timers = TimersOut()
    settings = UserSettingsOut()
    cases = CaseStatusOut(many=True)
