import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("cases", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_uuid", models.CharField(db_index=True, max_length=64)),
                ("title", models.CharField(max_length=200)),
                ("item_type", models.CharField(max_length=16)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("sell_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("rarity", models.CharField(blank=True, max_length=32)),
                ("status", models.CharField(choices=[("available", "Available"), ("processing", "Processing"), ("sold", "Sold"), ("received", "Received")], db_index=True, default="available", max_length=16)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("item", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="inventory", to="cases.item")),
                ("spin", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="inventory", to="cases.spin")),
            ],
            options={
                "verbose_name_plural": "inventory entries",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["user_uuid", "status"], name="inventory_user_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="RedemptionRequest",
            fields=[
                ("id", models.CharField(editable=False, max_length=16, primary_key=True, serialize=False)),
                ("user_uuid", models.CharField(db_index=True, max_length=64)),
                ("item_title", models.CharField(max_length=200)),
                ("item_type", models.CharField(max_length=16)),
                ("trade_link", models.URLField(blank=True, max_length=500)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("denied", "Denied"), ("returned", "Returned")], db_index=True, default="pending", max_length=16)),
                ("admin_comment", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("inventory", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="redemptions", to="inventory.inventoryentry")),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [models.UniqueConstraint(condition=models.Q(("status", "pending")), fields=("inventory",), name="uq_pending_redemption_per_inventory")],
            },
        ),
    ]
