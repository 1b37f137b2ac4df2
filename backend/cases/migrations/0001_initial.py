import cases.models
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.CharField(default=cases.models.generate_item_id, max_length=64, primary_key=True, serialize=False)),
                ("type", models.CharField(choices=[("skin", "Skin"), ("physical", "Physical"), ("money", "Money")], db_index=True, max_length=16)),
                ("title", models.CharField(max_length=200)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("display_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("sell_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("rarity", models.CharField(default="common", max_length=32)),
                ("stock", models.IntegerField(default=-1, validators=[django.core.validators.MinValueValidator(-1)])),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="Case",
            fields=[
                ("id", models.SlugField(max_length=64, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("type", models.CharField(choices=[("daily", "Daily"), ("monthly", "Monthly")], db_index=True, max_length=16)),
                ("threshold", models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("sort_order", models.IntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["type", "sort_order", "threshold"],
            },
        ),
        migrations.CreateModel(
            name="CaseItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("weight", models.FloatField(validators=[django.core.validators.MinValueValidator(0.0)])),
                ("rarity", models.CharField(blank=True, max_length=32)),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="links", to="cases.case")),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="case_links", to="cases.item")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("case", "item"), name="uq_case_item")],
            },
        ),
        migrations.AddField(
            model_name="case",
            name="items",
            field=models.ManyToManyField(related_name="cases", through="cases.CaseItem", to="cases.item"),
        ),
        migrations.CreateModel(
            name="CaseClaim",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_uuid", models.CharField(max_length=64)),
                ("period_key", models.CharField(max_length=10)),
                ("claimed_at", models.DateTimeField(auto_now_add=True)),
                ("case", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="claims", to="cases.case")),
            ],
            options={
                "indexes": [models.Index(fields=["user_uuid", "period_key"], name="claim_user_period_idx")],
                "constraints": [models.UniqueConstraint(fields=("user_uuid", "case", "period_key"), name="uq_case_claims_user_case_period")],
            },
        ),
        migrations.CreateModel(
            name="Spin",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_uuid", models.CharField(db_index=True, max_length=64)),
                ("nickname", models.CharField(blank=True, max_length=120)),
                ("case_title", models.CharField(blank=True, max_length=200)),
                ("period_key", models.CharField(max_length=10)),
                ("prize_title", models.CharField(max_length=200)),
                ("prize_type", models.CharField(max_length=16)),
                ("prize_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("rarity", models.CharField(blank=True, max_length=32)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("case", models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="spins", to="cases.case")),
                ("item", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="spins", to="cases.item")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
