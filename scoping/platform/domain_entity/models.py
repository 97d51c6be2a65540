"""
Domain Entity Models
Field storage, per-bundle field configuration, display components and
persisted module settings.
"""

from django.db import models

from scoping.core.models import CoreBaseModel

from .constants import (
    CARDINALITY_UNLIMITED,
    DEFAULT_MODE,
    FIELD_NAME,
    TARGET_TYPE,
    Behavior,
    DisplayContext,
)


def storage_id_for(entity_type_id: str, field_name: str = FIELD_NAME) -> str:
    return f"{entity_type_id}.{field_name}"


def field_id_for(entity_type_id: str, bundle: str, field_name: str = FIELD_NAME) -> str:
    return f"{entity_type_id}.{bundle}.{field_name}"


class FieldStorageConfig(CoreBaseModel):
    """
    The domain access field storage of an entity type.
    Its existence is what marks the entity type as domain enabled.
    """

    storage_id = models.CharField(max_length=255, unique=True, editable=False)
    entity_type = models.CharField(max_length=64, db_index=True)
    field_name = models.CharField(max_length=64, default=FIELD_NAME)
    field_type = models.CharField(max_length=64, default="entity_reference")
    cardinality = models.IntegerField(default=CARDINALITY_UNLIMITED)
    target_type = models.CharField(max_length=64, default=TARGET_TYPE)
    locked = models.BooleanField(default=False)
    persist_with_no_fields = models.BooleanField(default=True)

    class Meta:
        db_table = "domain_entity_field_storages"
        ordering = ["entity_type"]
        permissions = [
            ("administer_domains", "Administer domains"),
        ]

    def __str__(self):
        return self.storage_id

    def save(self, *args, **kwargs):
        self.storage_id = storage_id_for(self.entity_type, self.field_name)
        super().save(*args, **kwargs)

    @property
    def is_multiple(self):
        return self.cardinality == CARDINALITY_UNLIMITED or self.cardinality > 1


class FieldConfig(CoreBaseModel):
    """The domain access field attached to one bundle of an entity type."""

    config_id = models.CharField(max_length=255, unique=True, editable=False)
    field_storage = models.ForeignKey(
        FieldStorageConfig,
        on_delete=models.CASCADE,
        related_name="fields",
    )
    entity_type = models.CharField(max_length=64, db_index=True)
    bundle = models.CharField(max_length=64)
    field_name = models.CharField(max_length=64, default=FIELD_NAME)

    label = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    required = models.BooleanField(default=False)
    default_value_callback = models.CharField(max_length=255, blank=True)

    behavior = models.CharField(
        max_length=16,
        choices=Behavior.choices,
        default=Behavior.AUTO,
    )
    # Ordered domain ids; empty means affiliated to all domains.
    default_domains = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "domain_entity_fields"
        ordering = ["entity_type", "bundle"]
        unique_together = [("entity_type", "bundle", "field_name")]

    def __str__(self):
        return self.config_id

    def save(self, *args, **kwargs):
        self.entity_type = self.field_storage.entity_type
        self.field_name = self.field_storage.field_name
        self.config_id = field_id_for(self.entity_type, self.bundle, self.field_name)
        super().save(*args, **kwargs)


class EntityDisplay(CoreBaseModel):
    """Components shown on an entity type bundle's form or view display."""

    entity_type = models.CharField(max_length=64)
    bundle = models.CharField(max_length=64)
    context = models.CharField(max_length=8, choices=DisplayContext.choices)
    mode = models.CharField(max_length=64, default=DEFAULT_MODE)
    content = models.JSONField(default=dict, blank=True)
    hidden = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "domain_entity_displays"
        unique_together = [("entity_type", "bundle", "context", "mode")]

    def __str__(self):
        return f"{self.entity_type}.{self.bundle}.{self.mode} ({self.context})"

    @classmethod
    def load_or_create(cls, entity_type, bundle, context, mode=DEFAULT_MODE):
        display, _ = cls.objects.get_or_create(
            entity_type=entity_type,
            bundle=bundle,
            context=context,
            mode=mode,
        )
        return display

    def get_component(self, name):
        return self.content.get(name)

    def set_component(self, name, options=None):
        self.content[name] = dict(options or {})
        self.hidden.pop(name, None)
        return self

    def remove_component(self, name):
        self.content.pop(name, None)
        self.hidden[name] = True
        return self


class ConfigObject(CoreBaseModel):
    """A named bag of persisted settings, e.g. "domain_entity.settings"."""

    name = models.CharField(max_length=255, unique=True)
    data = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "domain_entity_config"

    def __str__(self):
        return self.name
