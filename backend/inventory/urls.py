# inventory/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path("inventory", views.inventory_list, name="inventory-list"),
    path("inventory/sell", views.sell_item, name="inventory-sell"),
    path("inventory/claim", views.claim_item, name="inventory-claim"),
    path("inventory/requests", views.request_list, name="inventory-requests"),
]
