"""
Entity type registry.

Entity types are Django models that opted in to domain scoping, either via
the DOMAIN_ENTITY["ENTITY_TYPES"] setting or by calling
``entity_types.register(...)`` from an AppConfig.ready() hook.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Type

from django.apps import apps
from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured
from django.db import models

from .exceptions import EntityKindNotFound
from .types import Bundle, EntityKind

logger = logging.getLogger(__name__)


class AlreadyRegistered(ImproperlyConfigured):
    pass


class EntityKindRegistry:
    """Keeps the entity types known to the platform and their bundles."""

    def __init__(self):
        self._definitions: Dict[str, EntityKind] = {}
        self._models: Dict[str, Type[models.Model]] = {}

    def register(
        self,
        model: Type[models.Model],
        kind_id: Optional[str] = None,
        label: Optional[str] = None,
        bundle_field: Optional[str] = None,
        bundles: Optional[Mapping[str, str]] = None,
        fieldable: bool = True,
    ) -> EntityKind:
        """
        Register a model as an entity type.

        Bundles come from ``bundles`` when given, otherwise from the choices of
        ``bundle_field``. A model without either owns one implicit bundle named
        after the entity type.
        """
        kind_id = kind_id or model._meta.model_name
        if kind_id in self._definitions:
            raise AlreadyRegistered(f"Entity type '{kind_id}' is already registered.")
        if "." in kind_id:
            raise ImproperlyConfigured(f"Entity type id '{kind_id}' must not contain dots.")

        label = label or str(model._meta.verbose_name).capitalize()
        bundle_records = self._build_bundles(model, kind_id, label, bundle_field, bundles)

        definition = EntityKind(
            id=kind_id,
            label=str(label),
            model_label=model._meta.label_lower,
            fieldable=fieldable,
            bundle_field=bundle_field or "",
            bundles=bundle_records,
        )
        self._definitions[kind_id] = definition
        self._models[kind_id] = model
        logger.debug(f"Registered entity type {kind_id} ({definition.model_label}) with {len(bundle_records)} bundle(s)")
        return definition

    def _build_bundles(self, model, kind_id, label, bundle_field, bundles):
        if bundles is not None:
            return tuple(Bundle(id=str(key), label=str(value)) for key, value in bundles.items())
        if bundle_field:
            try:
                field = model._meta.get_field(bundle_field)
            except FieldDoesNotExist as exc:
                raise ImproperlyConfigured(
                    f"Bundle field '{bundle_field}' does not exist on {model._meta.label}."
                ) from exc
            if not field.choices:
                raise ImproperlyConfigured(
                    f"Bundle field '{bundle_field}' on {model._meta.label} must declare choices."
                )
            return tuple(Bundle(id=str(value), label=str(text)) for value, text in field.flatchoices)
        return (Bundle(id=kind_id, label=str(label)),)

    def unregister(self, kind_id: str) -> None:
        self._definitions.pop(kind_id, None)
        self._models.pop(kind_id, None)

    def load_from_settings(self, entries: Iterable[Mapping]) -> None:
        for entry in entries:
            entry = dict(entry)
            model_path = entry.pop("model", None)
            if not model_path:
                raise ImproperlyConfigured("DOMAIN_ENTITY['ENTITY_TYPES'] entries need a 'model' key.")
            try:
                model = apps.get_model(model_path)
            except (LookupError, ValueError) as exc:
                raise ImproperlyConfigured(f"Unknown entity type model '{model_path}'.") from exc
            self.register(model, **entry)

    def get_definitions(self) -> Dict[str, EntityKind]:
        return dict(self._definitions)

    def get_definition(self, kind_id: str, exception_on_invalid: bool = False) -> Optional[EntityKind]:
        definition = self._definitions.get(kind_id)
        if definition is None and exception_on_invalid:
            raise EntityKindNotFound(kind_id)
        return definition

    def get_bundle_info(self, kind_id: str) -> Dict[str, Dict[str, str]]:
        """Bundles of the entity type keyed by bundle id, e.g. {"news": {"label": "News"}}."""
        return self.get_definition(kind_id, exception_on_invalid=True).bundle_info()

    def get_model(self, kind_id: str) -> Type[models.Model]:
        if kind_id not in self._models:
            raise EntityKindNotFound(kind_id)
        return self._models[kind_id]

    def __contains__(self, kind_id):
        return kind_id in self._definitions


entity_types = EntityKindRegistry()
