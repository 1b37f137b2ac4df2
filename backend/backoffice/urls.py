# backoffice/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("items", views.items, name="admin-items"),
    path("items/<str:item_id>", views.item_detail, name="admin-item-detail"),
    path("cases", views.cases, name="admin-cases"),
    path("cases/<slug:case_id>", views.case_detail, name="admin-case-detail"),
    path("requests", views.requests_list, name="admin-requests"),
    path("requests/<str:request_id>/approve", views.approve_request, name="admin-request-approve"),
    path("requests/<str:request_id>/deny", views.deny_request, name="admin-request-deny"),
    path("requests/<str:request_id>/return", views.return_request, name="admin-request-return"),
]
