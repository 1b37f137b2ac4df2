from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from cases import catalog
from cases.models import Case, CaseClaim, CaseItem, Item
from core.errors import CaseNotFound, ItemNotFound
from .factories import make_case, make_item


class CatalogWriteTests(TestCase):
    def setUp(self):
        self.a = make_item("a")
        self.b = make_item("b")
        self.c = make_item("c")

    def test_upsert_case_replaces_contents(self):
        data = {"id": "daily-3", "title": "Daily", "type": "daily", "threshold": Decimal("3")}
        catalog.upsert_case(data, [{"item_id": "a", "weight": 1}, {"item_id": "b", "weight": 2}])
        catalog.upsert_case({**data, "title": "Daily 3"}, [{"item_id": "c", "weight": 5, "rarity": "epic"}])

        case = Case.objects.get(pk="daily-3")
        self.assertEqual(case.title, "Daily 3")
        contents = catalog.list_case_contents(case)
        self.assertEqual([(c.item.pk, c.weight, c.rarity) for c in contents], [("c", 5.0, "epic")])

    def test_upsert_case_with_unknown_item_changes_nothing(self):
        make_case("daily-3", contents=[(self.a, 1)])
        with self.assertRaises(ItemNotFound):
            catalog.upsert_case(
                {"id": "daily-3", "title": "x", "type": "daily", "threshold": Decimal("3")},
                [{"item_id": "ghost", "weight": 1}],
            )
        self.assertEqual(CaseItem.objects.filter(case_id="daily-3").count(), 1)

    def test_delete_item_removes_links(self):
        make_case("daily-3", contents=[(self.a, 1), (self.b, 1)])
        make_case("daily-10", threshold="10", contents=[(self.a, 1)])

        unlinked = catalog.delete_item("a")

        self.assertEqual(unlinked, 2)
        self.assertFalse(Item.objects.filter(pk="a").exists())
        self.assertEqual(CaseItem.objects.count(), 1)

    def test_delete_case_soft_when_claimed(self):
        case = make_case("daily-3", contents=[(self.a, 1)])
        CaseClaim.objects.create(user_uuid="u-1", case=case, period_key="2024-03-15")

        self.assertFalse(catalog.delete_case("daily-3"))
        case.refresh_from_db()
        self.assertFalse(case.is_active)
        with self.assertRaises(CaseNotFound):
            catalog.get_case("daily-3")

    def test_delete_case_hard_when_unused(self):
        make_case("daily-3", contents=[(self.a, 1)])
        self.assertTrue(catalog.delete_case("daily-3"))
        self.assertFalse(Case.objects.filter(pk="daily-3").exists())

    def test_drawable_contents_follow_engine_flags(self):
        self.b.is_active = False
        self.b.save()
        self.c.stock = 0
        self.c.save()
        case = make_case("daily-3", contents=[(self.a, 1), (self.b, 1), (self.c, 1)])
        flags = {"REQUIRE_ACTIVE_ITEMS": True, "SKIP_OUT_OF_STOCK": True}

        self.assertEqual([c.item.pk for c in catalog.drawable_contents(case, flags)], ["a"])

        loose = {"REQUIRE_ACTIVE_ITEMS": False, "SKIP_OUT_OF_STOCK": False}
        self.assertEqual([c.item.pk for c in catalog.drawable_contents(case, loose)], ["a", "b", "c"])

    def test_item_rarity_is_default_for_links(self):
        self.a.rarity = "rare"
        self.a.save()
        case = make_case("daily-3", contents=[(self.a, 1)])
        self.assertEqual(catalog.list_case_contents(case)[0].rarity, "rare")


class SeedCasesCommandTests(TestCase):
    def test_seeds_default_ladder_once(self):
        call_command("seed_cases", stdout=StringIO())
        call_command("seed_cases", stdout=StringIO())

        daily = list(Case.objects.filter(type="daily").values_list("threshold", flat=True))
        monthly = list(Case.objects.filter(type="monthly").values_list("threshold", flat=True))
        self.assertEqual(daily, [Decimal("3"), Decimal("10")])
        self.assertEqual(monthly, [Decimal(x) for x in ("25", "50", "75", "100", "150")])
        self.assertTrue(all(catalog.list_case_contents(c) for c in Case.objects.all()))
