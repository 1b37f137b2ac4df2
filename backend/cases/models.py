# cases/models.py
import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


def generate_item_id():
    return uuid.uuid4().hex


class Item(models.Model):
    TYPE_SKIN = "skin"
    TYPE_PHYSICAL = "physical"
    TYPE_MONEY = "money"

    TYPE_CHOICES = [
        (TYPE_SKIN, "Skin"),
        (TYPE_PHYSICAL, "Physical"),
        (TYPE_MONEY, "Money"),
    ]

    UNLIMITED_STOCK = -1

    id = models.CharField(max_length=64, primary_key=True, default=generate_item_id)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, db_index=True)
    title = models.CharField(max_length=200)
    image_url = models.URLField(max_length=500, blank=True)

    display_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sell_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    rarity = models.CharField(max_length=32, default="common")

    # -1 = unlimited, otherwise decremented on every grant
    stock = models.IntegerField(default=UNLIMITED_STOCK, validators=[MinValueValidator(UNLIMITED_STOCK)])
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]

    @property
    def has_stock(self):
        return self.stock == self.UNLIMITED_STOCK or self.stock > 0

    def __str__(self):
        return f"{self.title} ({self.type})"


class Case(models.Model):
    TYPE_DAILY = "daily"
    TYPE_MONTHLY = "monthly"

    TYPE_CHOICES = [
        (TYPE_DAILY, "Daily"),
        (TYPE_MONTHLY, "Monthly"),
    ]

    id = models.SlugField(max_length=64, primary_key=True)
    title = models.CharField(max_length=200)
    type = models.CharField(max_length=16, choices=TYPE_CHOICES, db_index=True)
    threshold = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))]
    )
    image_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    sort_order = models.IntegerField(default=0)

    items = models.ManyToManyField(Item, through="CaseItem", related_name="cases")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["type", "sort_order", "threshold"]

    def __str__(self):
        return f"{self.title} [{self.type} >= {self.threshold}]"


class CaseItem(models.Model):
    case = models.ForeignKey(Case, on_delete=models.CASCADE, related_name="links")
    item = models.ForeignKey(Item, on_delete=models.CASCADE, related_name="case_links")
    weight = models.FloatField(validators=[MinValueValidator(0.0)])
    # blank = fall back to item.rarity
    rarity = models.CharField(max_length=32, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["case", "item"], name="uq_case_item"),
        ]

    @property
    def effective_rarity(self):
        return self.rarity or self.item.rarity

    def __str__(self):
        return f"{self.case_id}:{self.item_id} w={self.weight}"


class CaseClaim(models.Model):
    """One row per (user, case, period). The unique constraint is the anti-replay guarantee."""

    user_uuid = models.CharField(max_length=64)
    case = models.ForeignKey(Case, on_delete=models.CASCADE, related_name="claims")
    period_key = models.CharField(max_length=10)
    claimed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user_uuid", "case", "period_key"],
                name="uq_case_claims_user_case_period",
            ),
        ]
        indexes = [
            models.Index(fields=["user_uuid", "period_key"], name="claim_user_period_idx"),
        ]

    def __str__(self):
        return f"Claim({self.user_uuid}, {self.case_id}, {self.period_key})"


class Spin(models.Model):
    # append-only drop history
    user_uuid = models.CharField(max_length=64, db_index=True)
    nickname = models.CharField(max_length=120, blank=True)
    case = models.ForeignKey(Case, on_delete=models.SET_NULL, null=True, related_name="spins")
    case_title = models.CharField(max_length=200, blank=True)
    period_key = models.CharField(max_length=10)

    item = models.ForeignKey(Item, on_delete=models.SET_NULL, null=True, blank=True, related_name="spins")
    prize_title = models.CharField(max_length=200)
    prize_type = models.CharField(max_length=16)
    prize_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    rarity = models.CharField(max_length=32, blank=True)
    image_url = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Spin {self.id}: {self.prize_title} for {self.user_uuid}"
