# cases/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("cases", views.list_cases, name="cases-list"),
    path("cases/open", views.open_case, name="cases-open"),
    path("cases/<slug:case_id>", views.case_detail, name="cases-detail"),
    path("stats/public", views.public_stats, name="stats-public"),
    path("drops/recent", views.recent_drops, name="drops-recent"),
]
