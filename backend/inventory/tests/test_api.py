from decimal import Decimal

from rest_framework.test import APITestCase

from accounts.sessions import create_session
from inventory.models import InventoryEntry


class InventoryApiTests(APITestCase):
    def setUp(self):
        session = create_session("u-1", "neo")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {session.token}")
        self.skin = InventoryEntry.objects.create(
            user_uuid="u-1", title="AK skin", item_type="skin", amount=Decimal("4"), sell_price=Decimal("3"),
        )
        self.cash = InventoryEntry.objects.create(
            user_uuid="u-1", title="5 EUR", item_type="money", amount=Decimal("5"),
        )

    def test_list(self):
        response = self.client.get("/api/inventory")
        self.assertEqual(response.status_code, 200)
        self.assertEqual({row["id"] for row in response.data["items"]}, {self.skin.pk, self.cash.pk})

    def test_sell_money_is_rejected(self):
        response = self.client.post("/api/inventory/sell", {"inventory_id": self.cash.pk}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "CANNOT_SELL_MONEY")

    def test_sell_skin(self):
        response = self.client.post("/api/inventory/sell", {"inventory_id": self.skin.pk}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["sold_amount"], "3.00")
        self.assertEqual(response.data["status"], "sold")

    def test_claim_skin_needs_trade_link(self):
        response = self.client.post("/api/inventory/claim", {"inventory_id": self.skin.pk}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "TRADE_LINK_MISSING")

    def test_claim_after_setting_trade_link(self):
        self.client.post(
            "/api/user/tradelink",
            {"trade_link": "https://steamcommunity.com/tradeoffer/new/?partner=1"},
            format="json",
        )
        response = self.client.post("/api/inventory/claim", {"inventory_id": self.skin.pk}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "processing")
        self.assertEqual(response.data["request"]["status"], "pending")

        requests = self.client.get("/api/inventory/requests").data["requests"]
        self.assertEqual([r["id"] for r in requests], [response.data["request"]["id"]])

    def test_unknown_entry(self):
        response = self.client.post("/api/inventory/sell", {"inventory_id": 99999}, format="json")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "INVENTORY_NOT_FOUND")
