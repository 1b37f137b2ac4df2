from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.test import override_settings
from django.utils import timezone
from rest_framework.test import APITestCase

from accounts.sessions import create_session
from cases.models import Spin
from cases.progress import Progress
from .factories import billing_with_deposits, make_case, make_item


class CatalogApiTests(APITestCase):
    def setUp(self):
        cash = make_item("cash-1")
        skin = make_item("skin-1", type="skin", price="4.00")
        make_case("daily-3", contents=[(cash, 3), (skin, 1)])
        make_case("hidden", is_active=False)

    def test_list_shows_active_cases(self):
        response = self.client.get("/api/cases")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["id"] for c in response.data["cases"]], ["daily-3"])

    def test_detail_has_chances(self):
        response = self.client.get("/api/cases/daily-3")
        self.assertEqual(response.status_code, 200)
        chances = {row["item_id"]: row["chance"] for row in response.data["case"]["contents"]}
        self.assertEqual(chances, {"cash-1": 75.0, "skin-1": 25.0})

    def test_chances_skip_items_the_draw_cannot_pick(self):
        live = make_item("live")
        dead = make_item("dead", is_active=False)
        sold_out = make_item("sold-out", stock=0)
        make_case("c1", contents=[(live, 50), (dead, 50), (sold_out, 50)])

        response = self.client.get("/api/cases/c1")

        rows = {row["item_id"]: row for row in response.data["case"]["contents"]}
        self.assertEqual({k: r["chance"] for k, r in rows.items()}, {"live": 100.0, "dead": 0.0, "sold-out": 0.0})
        self.assertFalse(rows["dead"]["drawable"])
        self.assertEqual(response.data["case"]["total_weight"], 50.0)

    def test_inactive_case_is_not_found(self):
        response = self.client.get("/api/cases/hidden")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data, {"ok": False, "error": "CASE_NOT_FOUND", "message": "Case not found"})


class OpenCaseApiTests(APITestCase):
    def setUp(self):
        cash = make_item("cash-1")
        make_case("daily-3", threshold="3", contents=[(cash, 1)])
        self.session = create_session("u-1", "neo")
        patcher = mock.patch(
            "cases.progress.get_billing_client",
            return_value=billing_with_deposits((timezone.localdate().isoformat(), "0")),
        )
        self.billing = patcher.start()
        self.addCleanup(patcher.stop)

    def auth(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.session.token}")

    def test_open_requires_session(self):
        response = self.client.post("/api/cases/open", {"case_id": "daily-3"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "NO_SESSION")

    def test_open_with_unknown_token(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer nope")
        response = self.client.post("/api/cases/open", {"case_id": "daily-3"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "INVALID_SESSION")

    def test_not_enough_deposit(self):
        self.auth()
        response = self.client.post("/api/cases/open", {"case_id": "daily-3"}, format="json")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["error"], "NOT_ENOUGH_DEPOSIT")

    def test_open_then_repeat(self):
        self.auth()
        with mock.patch("cases.engine.CaseEngine.progress_for", return_value=Progress(daily=Decimal("5.00"))):
            first = self.client.post("/api/cases/open", {"case_id": "daily-3"}, format="json")
            second = self.client.post("/api/cases/open", {"case_id": "daily-3"}, format="json")

        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.data["prize"]["item_id"], "cash-1")
        self.assertEqual(second.status_code, 409)
        self.assertEqual(second.data["error"], "ALREADY_OPENED")

    def test_validation_error_shape(self):
        self.auth()
        response = self.client.post("/api/cases/open", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "VALIDATION_ERROR")
        self.assertIn("case_id", response.data["details"])


class PublicFeedApiTests(APITestCase):
    def setUp(self):
        for i in range(3):
            Spin.objects.create(
                user_uuid=f"u-{i % 2}", nickname="neo", case_title="Daily", period_key="2024-03-15",
                prize_title=f"Prize {i}", prize_type="money", prize_amount="1.50",
            )

    def test_recent_drops_limit_is_capped(self):
        response = self.client.get("/api/drops/recent", {"limit": 2})
        self.assertEqual(len(response.data["drops"]), 2)
        self.assertEqual(response.data["drops"][0]["prize_title"], "Prize 2")

        with override_settings(RECENT_DROPS_LIMIT=1):
            response = self.client.get("/api/drops/recent", {"limit": 500})
        self.assertEqual(len(response.data["drops"]), 1)

    def test_public_stats(self):
        Spin.objects.filter(prize_title="Prize 0").update(created_at=timezone.now() - timedelta(days=3))
        response = self.client.get("/api/stats/public")
        stats = response.data["stats"]
        self.assertEqual(stats["total_spins"], 3)
        self.assertEqual(stats["total_players"], 2)
        self.assertEqual(stats["total_prize_value"], "4.50")
        self.assertEqual(stats["spins_today"], 2)
