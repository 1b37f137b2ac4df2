# cases/catalog.py
import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction

from core.errors import CaseNotFound, ItemNotFound
from .models import Case, CaseItem, Item

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("type", "title", "image_url", "display_price", "sell_price", "rarity", "stock", "is_active")
CASE_FIELDS = ("title", "type", "threshold", "image_url", "is_active", "sort_order")


@dataclass(frozen=True)
class CaseContent:
    item: Item
    weight: float
    rarity: str


# ======================================================
# READ PATH
# ======================================================
def list_active_cases():
    return list(Case.objects.filter(is_active=True))


def list_cases():
    return list(Case.objects.all())


def get_case(case_id, active_only=True) -> Case:
    qs = Case.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    try:
        return qs.get(pk=case_id)
    except Case.DoesNotExist:
        raise CaseNotFound()


def list_case_contents(case) -> list[CaseContent]:
    links = CaseItem.objects.filter(case=case).select_related("item").order_by("id")
    return [CaseContent(item=link.item, weight=link.weight, rarity=link.effective_rarity) for link in links]


def is_drawable(content, options=None) -> bool:
    """Whether a case row can come out of a draw under the ``CASE_ENGINE`` flags."""
    options = options or settings.CASE_ENGINE
    if content.weight <= 0:
        return False
    if options["REQUIRE_ACTIVE_ITEMS"] and not content.item.is_active:
        return False
    if options["SKIP_OUT_OF_STOCK"] and not content.item.has_stock:
        return False
    return True


def drawable_contents(case, options=None) -> list[CaseContent]:
    return [c for c in list_case_contents(case) if is_drawable(c, options)]


def list_items(active_only=False):
    qs = Item.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)
    return list(qs)


def get_item(item_id) -> Item:
    try:
        return Item.objects.get(pk=item_id)
    except Item.DoesNotExist:
        raise ItemNotFound()


# ======================================================
# WRITE PATH (OPERATOR)
# ======================================================
def upsert_item(data) -> Item:
    defaults = {k: data[k] for k in ITEM_FIELDS if k in data}
    item_id = data.get("id")
    if item_id:
        item, created = Item.objects.update_or_create(pk=item_id, defaults=defaults)
    else:
        item, created = Item.objects.create(**defaults), True
    logger.info("Item %s %s", item.pk, "created" if created else "updated")
    return item


@transaction.atomic
def delete_item(item_id):
    item = get_item(item_id)
    # unlink first so no case keeps pointing at a removed prize
    unlinked, _ = CaseItem.objects.filter(item=item).delete()
    item.delete()
    logger.info("Item %s deleted, %s case link(s) removed", item_id, unlinked)
    return unlinked


@transaction.atomic
def upsert_case(data, contents) -> Case:
    """
    Create or update a case and replace its whole content set.

    ``contents`` is the full list of ``{"item_id", "weight", "rarity"}``
    rows; every existing link of the case is removed before inserting them.
    """
    item_ids = [row["item_id"] for row in contents]
    known = set(Item.objects.filter(pk__in=item_ids).values_list("pk", flat=True))
    missing = [i for i in item_ids if i not in known]
    if missing:
        raise ItemNotFound(f"Unknown item(s): {', '.join(map(str, missing))}")

    defaults = {k: data[k] for k in CASE_FIELDS if k in data}
    case, created = Case.objects.update_or_create(pk=data["id"], defaults=defaults)

    CaseItem.objects.filter(case=case).delete()
    CaseItem.objects.bulk_create([
        CaseItem(
            case=case,
            item_id=row["item_id"],
            weight=row["weight"],
            rarity=row.get("rarity") or "",
        )
        for row in contents
    ])

    logger.info("Case %s %s with %s item(s)", case.pk, "created" if created else "updated", len(contents))
    return case


@transaction.atomic
def delete_case(case_id):
    """Hard delete when the case was never opened, otherwise deactivate to keep claim history."""
    case = get_case(case_id, active_only=False)
    if case.claims.exists():
        case.is_active = False
        case.save(update_fields=["is_active", "updated_at"])
        logger.info("Case %s deactivated (has claims)", case_id)
        return False

    case.delete()
    logger.info("Case %s deleted", case_id)
    return True
