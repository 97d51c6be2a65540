"""
Field operations for the domain access field.

The mapper is the only place that creates or removes the field storage and
the per-bundle field configuration. Database errors are not caught here.
"""

import logging
from typing import Dict, List, Optional

from scoping.platform.domains.loader import domain_loader

from .constants import (
    DEFAULT_VALUE_CALLBACK,
    DOMAIN_ACTIVE,
    FIELD_DESCRIPTION,
    FIELD_LABEL,
    FIELD_NAME,
    FIELD_WIDGET,
    Behavior,
    DisplayContext,
)
from .exceptions import EntityKindNotFound
from .models import (
    EntityDisplay,
    FieldConfig,
    FieldStorageConfig,
    field_id_for,
    storage_id_for,
)
from .registry import EntityKindRegistry, entity_types
from .signals import allowed_entity_types_alter
from .types import EntityKind, EntityTypeState

logger = logging.getLogger(__name__)


class DomainEntityMapper:
    """Provides field operations for domain entity module fields."""

    FIELD_NAME = FIELD_NAME
    BEHAVIOR_AUTO = Behavior.AUTO.value
    BEHAVIOR_USER = Behavior.USER.value

    def __init__(self, registry: Optional[EntityKindRegistry] = None):
        self.registry = registry if registry is not None else entity_types

    def _get_definition(self, entity_type_id: str) -> EntityKind:
        return self.registry.get_definition(entity_type_id, exception_on_invalid=True)

    def get_entity_types(self) -> Dict[str, EntityKind]:
        """Fieldable entity type definitions keyed by id."""
        return {
            entity_type_id: definition
            for entity_type_id, definition in self.registry.get_definitions().items()
            if definition.fieldable
        }

    def get_enabled_entity_types(self) -> Dict[str, EntityKind]:
        """Entity types that have the domain access field storage."""
        types = self.get_entity_types()
        with_storage = set(
            FieldStorageConfig.objects.filter(
                entity_type__in=list(types),
                field_name=FIELD_NAME,
            ).values_list("entity_type", flat=True)
        )
        return {
            entity_type_id: definition
            for entity_type_id, definition in types.items()
            if entity_type_id in with_storage
        }

    def load_field_storage(self, entity_type_id: str) -> Optional[FieldStorageConfig]:
        self._get_definition(entity_type_id)
        return FieldStorageConfig.objects.filter(storage_id=storage_id_for(entity_type_id)).first()

    def load_field(self, entity_type_id: str, bundle: str) -> Optional[FieldConfig]:
        self._get_definition(entity_type_id)
        return FieldConfig.objects.filter(config_id=field_id_for(entity_type_id, bundle)).first()

    def get_state(self, entity_type_id: str) -> EntityTypeState:
        storage = self.load_field_storage(entity_type_id)
        if storage is None:
            return EntityTypeState.DISABLED
        if not storage.fields.exists():
            return EntityTypeState.ENABLED_NO_BUNDLES
        return EntityTypeState.ENABLED_CONFIGURED

    def create_field_storage(self, entity_type_id: str) -> FieldStorageConfig:
        definition = self._get_definition(entity_type_id)
        if not definition.fieldable:
            raise EntityKindNotFound(entity_type_id)

        field_storage = self.load_field_storage(entity_type_id)
        if field_storage:
            # Prevent creation of existing field storage.
            return field_storage

        field_storage = FieldStorageConfig(
            entity_type=entity_type_id,
            field_name=FIELD_NAME,
            locked=False,
            persist_with_no_fields=True,
        )
        field_storage.save()
        logger.info(f"Created field storage {field_storage.storage_id}")
        return field_storage

    def delete_field_storage(self, entity_type_id: str) -> None:
        """Delete the field storage; its bundle fields go with it."""
        field_storage = self.load_field_storage(entity_type_id)
        if field_storage:
            _, deleted = field_storage.delete()
            logger.info(f"Deleted field storage {field_storage.storage_id}: {deleted}")

    def add_domain_field(self, entity_type_id: str, bundle: str) -> FieldConfig:
        """
        Create the domain field on a bundle, with its form widget.

        The field is removed from the default view display, it is an
        administrative attribute rather than content.
        """
        definition = self._get_definition(entity_type_id)
        if not definition.has_bundle(bundle):
            raise EntityKindNotFound(entity_type_id, bundle)

        field_storage = self.create_field_storage(entity_type_id)
        field = self.load_field(entity_type_id, bundle)
        if field:
            return field

        # TODO: better labels for entity types without bundles.
        field = FieldConfig(
            field_storage=field_storage,
            bundle=bundle,
            label=FIELD_LABEL,
            description=FIELD_DESCRIPTION,
            required=False,
            default_value_callback=DEFAULT_VALUE_CALLBACK,
            behavior=Behavior.AUTO,
            default_domains=[],
        )
        field.save()

        form_display = EntityDisplay.load_or_create(entity_type_id, bundle, DisplayContext.FORM)
        form_display.set_component(FIELD_NAME, {"type": FIELD_WIDGET})
        form_display.save()

        view_display = EntityDisplay.load_or_create(entity_type_id, bundle, DisplayContext.VIEW)
        view_display.remove_component(FIELD_NAME)
        view_display.save()

        logger.info(f"Added field {field.config_id}")
        return field

    def get_allowed_entity_types(self) -> Dict[str, Dict[str, Dict[str, List[str]]]]:
        """
        Domain enabled entity types with their bundle default assignation:
        {entity_type: {bundle: {behavior: [domain ids]}}}.
        """
        known = self.get_entity_types()
        allowed: Dict[str, Dict[str, Dict[str, List[str]]]] = {}
        fields = FieldConfig.objects.filter(
            field_name=FIELD_NAME,
            entity_type__in=list(known),
        ).order_by("entity_type", "bundle")
        for field in fields:
            allowed.setdefault(field.entity_type, {})[field.bundle] = {
                field.behavior: list(field.default_domains or []),
            }
        allowed_entity_types_alter.send(sender=self.__class__, allowed_entity_types=allowed)
        return allowed


def field_default_domains(entity_type_id: str, bundle: str, current_domain_id: Optional[str] = None, known_domains=None) -> List[str]:
    """
    Default value callback of the domain field.

    Returns the bundle's configured default domains, dropping ids no longer
    in the registry and replacing the "current domain" token. When nothing
    valid remains the entity is affiliated to the current domain.
    """
    field = FieldConfig.objects.filter(config_id=field_id_for(entity_type_id, bundle)).first()
    configured = list(field.default_domains or []) if field else []
    if configured and known_domains is None:
        known_domains = domain_loader.load_options_list()

    result = []
    for domain_id in configured:
        if domain_id == DOMAIN_ACTIVE:
            domain_id = current_domain_id
        elif domain_id not in known_domains:
            logger.warning(f"Ignoring unknown default domain {domain_id} on {field.config_id}")
            continue
        if domain_id and domain_id not in result:
            result.append(domain_id)
    if not result:
        return [current_domain_id] if current_domain_id else []
    return result
