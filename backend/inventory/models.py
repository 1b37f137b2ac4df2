# inventory/models.py
import random
from decimal import Decimal

from django.db import models


class InventoryEntry(models.Model):
    STATUS_AVAILABLE = "available"
    STATUS_PROCESSING = "processing"
    STATUS_SOLD = "sold"
    STATUS_RECEIVED = "received"

    STATUS_CHOICES = [
        (STATUS_AVAILABLE, "Available"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SOLD, "Sold"),
        (STATUS_RECEIVED, "Received"),
    ]

    OPEN_STATUSES = (STATUS_AVAILABLE, STATUS_PROCESSING)

    user_uuid = models.CharField(max_length=64, db_index=True)
    spin = models.ForeignKey("cases.Spin", on_delete=models.SET_NULL, null=True, blank=True, related_name="inventory")
    item = models.ForeignKey("cases.Item", on_delete=models.SET_NULL, null=True, blank=True, related_name="inventory")

    # snapshot at grant time; catalog edits never change a won prize
    title = models.CharField(max_length=200)
    item_type = models.CharField(max_length=16)
    image_url = models.URLField(max_length=500, blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sell_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    rarity = models.CharField(max_length=32, blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_AVAILABLE, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user_uuid", "status"], name="inventory_user_status_idx"),
        ]
        verbose_name_plural = "inventory entries"

    def __str__(self):
        return f"{self.title} ({self.status}) for {self.user_uuid}"


def generate_request_id():
    return f"REQ-{random.randint(0, 999999):06d}"


class RedemptionRequest(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_DENIED = "denied"
    STATUS_RETURNED = "returned"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_DENIED, "Denied"),
        (STATUS_RETURNED, "Returned"),
    ]

    id = models.CharField(max_length=16, primary_key=True, editable=False)
    user_uuid = models.CharField(max_length=64, db_index=True)
    inventory = models.ForeignKey(InventoryEntry, on_delete=models.CASCADE, related_name="redemptions")

    item_title = models.CharField(max_length=200)
    item_type = models.CharField(max_length=16)
    trade_link = models.URLField(max_length=500, blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    admin_comment = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            # one open request per inventory entry
            models.UniqueConstraint(
                fields=["inventory"],
                condition=models.Q(status="pending"),
                name="uq_pending_redemption_per_inventory",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self.id:
            while True:
                request_id = generate_request_id()
                if not RedemptionRequest.objects.filter(id=request_id).exists():
                    self.id = request_id
                    break
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.id} {self.item_title} ({self.status})"
