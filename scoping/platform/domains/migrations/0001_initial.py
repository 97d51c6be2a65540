import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Domain",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("domain_id", models.SlugField(help_text="Machine name", max_length=64, unique=True)),
                ("hostname", models.CharField(max_length=255, unique=True)),
                ("name", models.CharField(max_length=120)),
                ("weight", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("is_default", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "platform_domains",
                "ordering": ["weight", "name"],
            },
        ),
    ]
