"""
Settings reconciliation services behind the two configuration screens:

1. Entity types: which entity types carry the domain access field storage,
   plus the global bypass flag.
2. Bundles of one entity type: which bundles carry the field, their behavior
   and default domains.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from django.utils.translation import gettext as _

from scoping.core.services.audit import record_audit
from scoping.platform.domains.loader import DomainLoader, domain_loader

from .constants import (
    AUDIT_BUNDLES_SAVED,
    AUDIT_ENTITY_TYPES_SAVED,
    AUDIT_TARGET_TYPE,
    BYPASS_ACCESS_CONDITIONS,
    DOMAIN_ACTIVE,
    WARNING_EXISTING_ENTITIES,
    Behavior,
)
from .exceptions import EntityKindNotFound
from .mapper import DomainEntityMapper
from .reconciler import (
    BundleAction,
    EntityTypeDelta,
    compute_entity_type_delta,
    filter_selected,
    resolve_bundle_action,
)
from .settings_store import SettingsStore
from .types import EntityKind

logger = logging.getLogger(__name__)


def get_domain_options(loader: Optional[DomainLoader] = None) -> Dict[str, str]:
    """Options of the default domains selector, "current domain" first."""
    loader = loader or domain_loader
    options = {DOMAIN_ACTIVE: _("Current domain")}
    options.update(loader.load_options_list())
    return options


class EntityTypeSettingsService:
    """Enables or disables the domain access field per entity type."""

    def __init__(self, mapper: Optional[DomainEntityMapper] = None, settings_store: Optional[SettingsStore] = None):
        self.mapper = mapper or DomainEntityMapper()
        self.settings_store = settings_store

    def get_settings_store(self) -> SettingsStore:
        if self.settings_store is None:
            self.settings_store = SettingsStore()
        return self.settings_store

    def build(self) -> Dict[str, Any]:
        enabled = self.mapper.get_enabled_entity_types()
        rows = [
            {
                "id": entity_type_id,
                "label": definition.label,
                "enabled": entity_type_id in enabled,
            }
            for entity_type_id, definition in self.mapper.get_entity_types().items()
        ]
        return {
            BYPASS_ACCESS_CONDITIONS: bool(self.get_settings_store().get(BYPASS_ACCESS_CONDITIONS, False)),
            "entity_types": rows,
        }

    def save(self, checked: Iterable[str], bypass_access_conditions: bool, actor=None) -> EntityTypeDelta:
        self.get_settings_store().set(BYPASS_ACCESS_CONDITIONS, bool(bypass_access_conditions)).save()

        all_types = self.mapper.get_entity_types()
        enabled_types = self.mapper.get_enabled_entity_types()
        delta = compute_entity_type_delta(all_types, enabled_types, checked)

        # TODO: move storage creation/deletion to a background job for large sites.
        for entity_type_id in delta.delete:
            self.mapper.delete_field_storage(entity_type_id)
        for entity_type_id in delta.create:
            self.mapper.create_field_storage(entity_type_id)

        logger.info(
            f"Domain entity types saved: created={delta.create}, deleted={delta.delete}, "
            f"bypass={bool(bypass_access_conditions)}"
        )
        record_audit(
            actor=actor,
            target_type=AUDIT_TARGET_TYPE,
            target_id="entity_types",
            action=AUDIT_ENTITY_TYPES_SAVED,
            metadata={
                "created": delta.create,
                "deleted": delta.delete,
                BYPASS_ACCESS_CONDITIONS: bool(bypass_access_conditions),
            },
        )
        return delta


class BundleSettingsService:
    """Per bundle configuration of a domain enabled entity type."""

    def __init__(self, mapper: Optional[DomainEntityMapper] = None, loader: Optional[DomainLoader] = None):
        self.mapper = mapper or DomainEntityMapper()
        self.loader = loader or domain_loader

    def get_enabled_definition(self, entity_type_id: str) -> EntityKind:
        """The entity type, which must exist and be domain enabled."""
        enabled = self.mapper.get_enabled_entity_types()
        if entity_type_id not in enabled:
            raise EntityKindNotFound(entity_type_id)
        return enabled[entity_type_id]

    def get_title(self, definition: EntityKind) -> str:
        return _("Activate domain access on %(label)s (%(id)s)") % {
            "label": definition.label,
            "id": definition.id,
        }

    def has_existing_entities(self, entity_type_id: str) -> bool:
        model = self.mapper.registry.get_model(entity_type_id)
        return model._default_manager.all().exists()

    def build(self, entity_type_id: str) -> Dict[str, Any]:
        definition = self.get_enabled_definition(entity_type_id)
        data: Dict[str, Any] = {
            "entity_type": {"id": definition.id, "label": definition.label},
            "title": self.get_title(definition),
            "bundles": [],
            "info_no_bundles": None,
            "warning": None,
        }
        if not definition.bundles:
            data["info_no_bundles"] = _("Entity %(label)s (%(id)s) has no bundles yet.") % {
                "label": definition.label,
                "id": definition.id,
            }
            return data

        domain_options = get_domain_options(self.loader)
        for bundle in definition.bundles:
            field = self.mapper.load_field(entity_type_id, bundle.id)
            behavior = field.behavior if field else Behavior.AUTO.value
            # Stale ids (deleted domains) show as unselected.
            domains = [d for d in (field.default_domains if field else []) if d in domain_options]
            data["bundles"].append({
                "id": bundle.id,
                "label": bundle.label,
                "enable": field is not None,
                "open": field is not None,
                "behavior": behavior,
                "domains": domains,
            })

        data["behavior_options"] = {value: str(label) for value, label in Behavior.choices}
        data["domain_options"] = {key: str(label) for key, label in domain_options.items()}

        if self.has_existing_entities(entity_type_id):
            data["warning"] = str(WARNING_EXISTING_ENTITIES)
        return data

    def save(self, entity_type_id: str, values: Mapping[str, Mapping[str, Any]], actor=None) -> Dict[str, list]:
        """
        Apply submitted bundle values. Bundles missing from ``values`` count as
        unchecked. Each bundle is saved on its own: when one fails the bundles
        before it stay saved.

        A newly enabled bundle gets the default behavior and no default
        domains; saving again applies the submitted ones.
        """
        definition = self.get_enabled_definition(entity_type_id)
        bundle_ids = [bundle.id for bundle in definition.bundles]
        unknown = set(values) - set(bundle_ids)
        if unknown:
            logger.warning(f"Ignoring values for unknown bundles of {entity_type_id}: {sorted(unknown)}")

        results: Dict[str, list] = {"created": [], "updated": [], "deleted": []}
        for bundle in bundle_ids:
            bundle_values = values.get(bundle) or {}
            field = self.mapper.load_field(entity_type_id, bundle)
            action = resolve_bundle_action(bool(bundle_values.get("enable")), field is not None)

            if action == BundleAction.DELETE:
                field.delete()
                logger.info(f"Deleted field {field.config_id}")
                results["deleted"].append(bundle)
            elif action == BundleAction.UPDATE:
                if "domains" in bundle_values:
                    field.default_domains = filter_selected(bundle_values.get("domains"))
                if bundle_values.get("behavior"):
                    field.behavior = bundle_values["behavior"]
                field.save()
                logger.info(f"Updated field {field.config_id}: behavior={field.behavior}, domains={field.default_domains}")
                results["updated"].append(bundle)
            elif action == BundleAction.CREATE:
                self.mapper.add_domain_field(entity_type_id, bundle)
                results["created"].append(bundle)

        record_audit(
            actor=actor,
            target_type=AUDIT_TARGET_TYPE,
            target_id=entity_type_id,
            action=AUDIT_BUNDLES_SAVED,
            metadata=results,
        )
        return results
