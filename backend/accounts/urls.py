# accounts/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("auth/session", views.login_view, name="auth-session"),
    path("auth/logout", views.logout_view, name="auth-logout"),
    path("me", views.me_view, name="me"),
    path("user/settings", views.settings_view, name="user-settings"),
    path("user/tradelink", views.update_trade_link, name="user-tradelink"),
]
