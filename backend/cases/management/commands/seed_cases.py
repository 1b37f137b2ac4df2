from decimal import Decimal

from django.core.management.base import BaseCommand

from cases import catalog
from cases.models import Case, Item


# ============================
# DEFAULT LADDER
# ============================
DEFAULT_ITEMS = [
    {"id": "money-1", "type": Item.TYPE_MONEY, "title": "1 EUR balance", "display_price": Decimal("1.00"), "rarity": "common"},
    {"id": "money-3", "type": Item.TYPE_MONEY, "title": "3 EUR balance", "display_price": Decimal("3.00"), "rarity": "uncommon"},
    {"id": "money-5", "type": Item.TYPE_MONEY, "title": "5 EUR balance", "display_price": Decimal("5.00"), "rarity": "rare"},
    {"id": "money-10", "type": Item.TYPE_MONEY, "title": "10 EUR balance", "display_price": Decimal("10.00"), "rarity": "epic"},
    {"id": "skin-basic", "type": Item.TYPE_SKIN, "title": "Weapon skin (basic)", "display_price": Decimal("2.00"), "sell_price": Decimal("1.50"), "rarity": "uncommon"},
    {"id": "skin-premium", "type": Item.TYPE_SKIN, "title": "Weapon skin (premium)", "display_price": Decimal("15.00"), "sell_price": Decimal("10.00"), "rarity": "legendary"},
    {"id": "energy-drink", "type": Item.TYPE_PHYSICAL, "title": "Energy drink", "display_price": Decimal("2.50"), "sell_price": Decimal("1.00"), "rarity": "common"},
]

DEFAULT_CASES = [
    ("daily-3", "Daily 3", Case.TYPE_DAILY, "3"),
    ("daily-10", "Daily 10", Case.TYPE_DAILY, "10"),
    ("monthly-25", "Monthly 25", Case.TYPE_MONTHLY, "25"),
    ("monthly-50", "Monthly 50", Case.TYPE_MONTHLY, "50"),
    ("monthly-75", "Monthly 75", Case.TYPE_MONTHLY, "75"),
    ("monthly-100", "Monthly 100", Case.TYPE_MONTHLY, "100"),
    ("monthly-150", "Monthly 150", Case.TYPE_MONTHLY, "150"),
]

DEFAULT_CONTENTS = [
    {"item_id": "money-1", "weight": 50},
    {"item_id": "energy-drink", "weight": 25},
    {"item_id": "skin-basic", "weight": 12},
    {"item_id": "money-3", "weight": 8},
    {"item_id": "money-5", "weight": 4},
    {"item_id": "skin-premium", "weight": 1},
]
# ============================


class Command(BaseCommand):
    help = "Create the default daily/monthly case ladder"

    def add_arguments(self, parser):
        parser.add_argument("--force", action="store_true", help="Overwrite cases that already exist")

    def handle(self, *args, **options):
        for data in DEFAULT_ITEMS:
            if not Item.objects.filter(pk=data["id"]).exists():
                catalog.upsert_item(data)

        created = 0
        for order, (case_id, title, case_type, threshold) in enumerate(DEFAULT_CASES):
            if Case.objects.filter(pk=case_id).exists() and not options["force"]:
                self.stdout.write(self.style.WARNING(f"⚠️ Case {case_id} already exists, skipped"))
                continue

            catalog.upsert_case(
                {
                    "id": case_id,
                    "title": title,
                    "type": case_type,
                    "threshold": Decimal(threshold),
                    "sort_order": order,
                    "is_active": True,
                },
                DEFAULT_CONTENTS,
            )
            created += 1

        self.stdout.write(self.style.SUCCESS(f"✅ Seeded {created} case(s)"))
