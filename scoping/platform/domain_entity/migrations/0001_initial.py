import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="FieldStorageConfig",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("storage_id", models.CharField(editable=False, max_length=255, unique=True)),
                ("entity_type", models.CharField(db_index=True, max_length=64)),
                ("field_name", models.CharField(default="domain_access", max_length=64)),
                ("field_type", models.CharField(default="entity_reference", max_length=64)),
                ("cardinality", models.IntegerField(default=-1)),
                ("target_type", models.CharField(default="domain", max_length=64)),
                ("locked", models.BooleanField(default=False)),
                ("persist_with_no_fields", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "domain_entity_field_storages",
                "ordering": ["entity_type"],
                "permissions": [("administer_domains", "Administer domains")],
            },
        ),
        migrations.CreateModel(
            name="FieldConfig",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("config_id", models.CharField(editable=False, max_length=255, unique=True)),
                ("entity_type", models.CharField(db_index=True, max_length=64)),
                ("bundle", models.CharField(max_length=64)),
                ("field_name", models.CharField(default="domain_access", max_length=64)),
                ("label", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("required", models.BooleanField(default=False)),
                ("default_value_callback", models.CharField(blank=True, max_length=255)),
                (
                    "behavior",
                    models.CharField(
                        choices=[
                            (
                                "auto",
                                "Affiliate automatically created entity to a value (no widget on entity creation form, auto-assignation)",
                            ),
                            (
                                "user",
                                "User choose affiliate, with a default value (form widget on the entity creation form)",
                            ),
                        ],
                        default="auto",
                        max_length=16,
                    ),
                ),
                ("default_domains", models.JSONField(blank=True, default=list)),
                (
                    "field_storage",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fields",
                        to="domain_entity.fieldstorageconfig",
                    ),
                ),
            ],
            options={
                "db_table": "domain_entity_fields",
                "ordering": ["entity_type", "bundle"],
                "unique_together": {("entity_type", "bundle", "field_name")},
            },
        ),
        migrations.CreateModel(
            name="EntityDisplay",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("entity_type", models.CharField(max_length=64)),
                ("bundle", models.CharField(max_length=64)),
                ("context", models.CharField(choices=[("form", "Form"), ("view", "View")], max_length=8)),
                ("mode", models.CharField(default="default", max_length=64)),
                ("content", models.JSONField(blank=True, default=dict)),
                ("hidden", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "db_table": "domain_entity_displays",
                "unique_together": {("entity_type", "bundle", "context", "mode")},
            },
        ),
        migrations.CreateModel(
            name="ConfigObject",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255, unique=True)),
                ("data", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "db_table": "domain_entity_config",
            },
        ),
    ]
