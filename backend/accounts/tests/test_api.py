from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.utils import timezone
from rest_framework.test import APITestCase

from accounts.models import ClientSession, UserSettings
from accounts.sessions import create_session
from billing.client import BillingError, ClientProfile, ClientTokens
from cases.progress import Progress
from cases.tests.factories import make_case, make_item
from core.errors import InvalidCredentials


class LoginApiTests(APITestCase):
    def setUp(self):
        patcher = mock.patch("accounts.views.get_billing_client")
        self.billing = patcher.start().return_value
        self.addCleanup(patcher.stop)

    def test_login_issues_session(self):
        self.billing.authenticate.return_value = ClientTokens("a", "r", 900)
        self.billing.fetch_profile.return_value = ClientProfile(uuid="u-1", nickname="neo", deposit=Decimal("12.5"))

        response = self.client.post("/api/auth/session", {"login": "neo", "password": "pw"}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["ok"])
        self.assertEqual(response.data["user"], {"uuid": "u-1", "nickname": "neo", "deposit": "12.50"})
        session = ClientSession.objects.get(pk=response.data["session_token"])
        self.assertEqual(session.client_refresh_token, "r")

    def test_wrong_password(self):
        self.billing.authenticate.side_effect = InvalidCredentials()
        response = self.client.post("/api/auth/session", {"login": "neo", "password": "bad"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "INVALID_CREDENTIALS")

    def test_billing_down(self):
        self.billing.authenticate.side_effect = BillingError("timeout")
        response = self.client.post("/api/auth/session", {"login": "neo", "password": "pw"}, format="json")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "AUTH_FAILED")
        self.assertFalse(ClientSession.objects.exists())

    def test_logout(self):
        session = create_session("u-1", "neo")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {session.token}")

        self.assertEqual(self.client.post("/api/auth/logout").status_code, 200)
        response = self.client.get("/api/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "INVALID_SESSION")


class ProfileApiTests(APITestCase):
    def setUp(self):
        self.session = create_session(
            "u-1", "neo", tokens=ClientTokens(access_token="a", refresh_token="r", expires_in=900),
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.session.token}")

        patcher = mock.patch("accounts.views.get_billing_client")
        self.billing = patcher.start().return_value
        self.addCleanup(patcher.stop)

        progress = mock.patch(
            "cases.engine.CaseEngine.progress_for",
            return_value=Progress(daily=Decimal("4.00"), monthly=Decimal("30.00")),
        )
        progress.start()
        self.addCleanup(progress.stop)

        item = make_item("cash-1")
        make_case("daily-3", threshold="3", contents=[(item, 1)])
        make_case("monthly-50", threshold="50", type="monthly", contents=[(item, 1)])

    def test_me(self):
        self.billing.fetch_profile.return_value = ClientProfile("u-1", "neo", Decimal("7"))

        response = self.client.get("/api/me")

        self.assertEqual(response.status_code, 200)
        user = response.data["user"]
        self.assertEqual(user["deposit"], "7.00")
        self.assertEqual(user["progress"], {"daily": "4.00", "monthly": "30.00"})
        self.assertEqual({c["id"]: c["state"] for c in user["cases"]}, {"daily-3": "unlocked", "monthly-50": "locked"})
        self.assertGreater(user["timers"]["daily_reset_seconds"], 0)
        self.assertEqual(user["settings"]["level"], 1)

    def test_me_refreshes_expired_client_token(self):
        self.billing.fetch_profile.side_effect = [
            BillingError("expired"),
            ClientProfile("u-1", "neo", Decimal("2")),
        ]
        self.billing.refresh_client_token.return_value = ClientTokens("a2", "r2", 900)

        response = self.client.get("/api/me")

        self.assertEqual(response.data["user"]["deposit"], "2.00")
        self.session.refresh_from_db()
        self.assertEqual(self.session.client_access_token, "a2")

    def test_me_refreshes_stale_client_token_before_use(self):
        ClientSession.objects.filter(pk=self.session.token).update(
            client_token_expires_at=timezone.now() - timedelta(minutes=1),
        )
        self.billing.refresh_client_token.return_value = ClientTokens("a2", "r2", 900)
        self.billing.fetch_profile.return_value = ClientProfile("u-1", "neo", Decimal("3"))

        response = self.client.get("/api/me")

        self.assertEqual(response.data["user"]["deposit"], "3.00")
        self.billing.refresh_client_token.assert_called_once_with("r")
        self.billing.fetch_profile.assert_called_once_with("a2")

    def test_me_degrades_to_zero_deposit(self):
        self.billing.fetch_profile.side_effect = BillingError("down")
        self.billing.refresh_client_token.side_effect = BillingError("down")

        response = self.client.get("/api/me")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["user"]["deposit"], "0.00")

    def test_trade_link(self):
        bad = self.client.post("/api/user/tradelink", {"trade_link": "not a url"}, format="json")
        self.assertEqual(bad.status_code, 400)

        link = "https://steamcommunity.com/tradeoffer/new/?partner=1&token=x"
        response = self.client.post("/api/user/tradelink", {"trade_link": link}, format="json")
        self.assertEqual(response.data["settings"]["trade_link"], link)
        self.assertEqual(UserSettings.objects.get(user_uuid="u-1").trade_link, link)
        self.assertEqual(self.client.get("/api/user/settings").data["settings"]["trade_link"], link)

    def test_missing_session(self):
        self.client.credentials()
        response = self.client.get("/api/me")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "NO_SESSION")
