import accounts.models
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ClientSession",
            fields=[
                ("token", models.CharField(default=accounts.models.generate_session_token, editable=False, max_length=64, primary_key=True, serialize=False)),
                ("user_uuid", models.CharField(db_index=True, max_length=64)),
                ("nickname", models.CharField(blank=True, max_length=120)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("last_seen_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField(db_index=True)),
                ("client_access_token", models.TextField(blank=True)),
                ("client_refresh_token", models.TextField(blank=True)),
                ("client_token_expires_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "indexes": [models.Index(fields=["user_uuid", "expires_at"], name="session_user_expiry_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_uuid", models.CharField(max_length=64, unique=True)),
                ("trade_link", models.URLField(blank=True, max_length=500)),
                ("level", models.PositiveIntegerField(default=1)),
                ("xp", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "user settings",
            },
        ),
    ]
