from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from accounts.models import UserSettings
from accounts.sessions import create_session
from cases.models import Case, CaseClaim, CaseItem, Item
from cases.tests.factories import make_case, make_item
from inventory import services
from inventory.models import InventoryEntry, RedemptionRequest


class OperatorApiTestCase(APITestCase):
    def setUp(self):
        User = get_user_model()
        self.staff = User.objects.create_user(username="ops", password="pw", is_staff=True)
        self.client.force_authenticate(self.staff)


class PermissionTests(APITestCase):
    def test_anonymous_is_rejected(self):
        response = self.client.get("/api/admin/items")
        self.assertIn(response.status_code, (401, 403))
        self.assertFalse(response.data["ok"])

    def test_client_session_is_not_enough(self):
        session = create_session("u-1", "neo")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {session.token}")
        response = self.client.get("/api/admin/items")
        self.assertIn(response.status_code, (401, 403))

    def test_non_staff_user_is_forbidden(self):
        user = get_user_model().objects.create_user(username="player", password="pw")
        self.client.force_authenticate(user)
        response = self.client.get("/api/admin/items")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["error"], "FORBIDDEN")

    def test_token_auth(self):
        staff = get_user_model().objects.create_user(username="ops", password="pw", is_staff=True)
        token = Token.objects.create(user=staff)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")
        self.assertEqual(self.client.get("/api/admin/items").status_code, 200)


class ItemAdminApiTests(OperatorApiTestCase):
    def test_create_and_list(self):
        response = self.client.post(
            "/api/admin/items",
            {"type": "skin", "title": "AWP skin", "display_price": "12.00", "sell_price": "8.00", "stock": 3},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        item_id = response.data["item"]["id"]
        self.assertEqual(Item.objects.get(pk=item_id).stock, 3)

        listing = self.client.get("/api/admin/items").data["items"]
        self.assertEqual([row["id"] for row in listing], [item_id])

    def test_invalid_type(self):
        response = self.client.post("/api/admin/items", {"type": "car", "title": "x"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "VALIDATION_ERROR")

    def test_delete_item_unlinks_cases(self):
        item = make_item("cash-1")
        make_case("daily-3", contents=[(item, 1)])

        response = self.client.delete("/api/admin/items/cash-1")

        self.assertEqual(response.data["unlinked"], 1)
        self.assertFalse(CaseItem.objects.exists())

    def test_delete_unknown_item(self):
        response = self.client.delete("/api/admin/items/ghost")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "ITEM_NOT_FOUND")


class CaseAdminApiTests(OperatorApiTestCase):
    def setUp(self):
        super().setUp()
        self.a = make_item("a")
        self.b = make_item("b")

    def payload(self, **overrides):
        data = {
            "id": "daily-3",
            "title": "Daily 3",
            "type": "daily",
            "threshold": "3.00",
            "contents": [{"item_id": "a", "weight": 70}, {"item_id": "b", "weight": 30, "rarity": "rare"}],
        }
        data.update(overrides)
        return data

    def test_create_case(self):
        response = self.client.post("/api/admin/cases", self.payload(), format="json")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.data["case"]["contents"]), 2)

    def test_put_replaces_contents(self):
        self.client.post("/api/admin/cases", self.payload(), format="json")
        response = self.client.put(
            "/api/admin/cases/daily-3",
            self.payload(id="ignored", contents=[{"item_id": "b", "weight": 1}]),
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["case"]["id"], "daily-3")
        self.assertEqual([c["item_id"] for c in response.data["case"]["contents"]], ["b"])
        self.assertFalse(Case.objects.filter(pk="ignored").exists())

    def test_put_unknown_case(self):
        response = self.client.put("/api/admin/cases/nope", self.payload(), format="json")
        self.assertEqual(response.status_code, 404)

    def test_duplicate_items_rejected(self):
        contents = [{"item_id": "a", "weight": 1}, {"item_id": "a", "weight": 2}]
        response = self.client.post("/api/admin/cases", self.payload(contents=contents), format="json")
        self.assertEqual(response.status_code, 400)

    def test_negative_weight_rejected(self):
        response = self.client.post(
            "/api/admin/cases", self.payload(contents=[{"item_id": "a", "weight": -1}]), format="json",
        )
        self.assertEqual(response.status_code, 400)

    def test_delete_claimed_case_deactivates(self):
        case = make_case("daily-3", contents=[(self.a, 1)])
        CaseClaim.objects.create(user_uuid="u-1", case=case, period_key="2024-03-15")

        response = self.client.delete("/api/admin/cases/daily-3")

        self.assertEqual(response.data, {"ok": True, "deleted": False, "deactivated": True})
        self.assertFalse(Case.objects.get(pk="daily-3").is_active)


class RequestAdminApiTests(OperatorApiTestCase):
    def setUp(self):
        super().setUp()
        UserSettings.objects.create(user_uuid="u-1", trade_link="https://steamcommunity.com/tradeoffer/new/?partner=1")
        self.entry = InventoryEntry.objects.create(user_uuid="u-1", title="AK skin", item_type="skin")
        self.request_id = services.claim("u-1", self.entry.pk).request.pk

    def test_list_pending(self):
        response = self.client.get("/api/admin/requests", {"status": "pending"})
        self.assertEqual([r["id"] for r in response.data["requests"]], [self.request_id])

    def test_deny_with_comment(self):
        response = self.client.post(
            f"/api/admin/requests/{self.request_id}/deny", {"comment": "not eligible"}, format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["request"]["status"], "denied")
        self.assertEqual(response.data["request"]["admin_comment"], "not eligible")
        self.entry.refresh_from_db()
        self.assertEqual(self.entry.status, InventoryEntry.STATUS_AVAILABLE)

    def test_approve_then_return_is_rejected(self):
        self.client.post(f"/api/admin/requests/{self.request_id}/approve", format="json")
        response = self.client.post(f"/api/admin/requests/{self.request_id}/return", format="json")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "REQUEST_NOT_PENDING")
        self.assertEqual(RedemptionRequest.objects.get(pk=self.request_id).status, "approved")

    def test_unknown_request(self):
        response = self.client.post("/api/admin/requests/REQ-missing/approve", format="json")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "REQUEST_NOT_FOUND")
