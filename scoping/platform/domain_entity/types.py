"""Immutable value records describing entity types and their bundles."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


@dataclass(frozen=True)
class Bundle:
    id: str
    label: str


@dataclass(frozen=True)
class EntityKind:
    """A class of content objects that can carry attached fields."""

    id: str
    label: str
    model_label: str
    fieldable: bool = True
    bundle_field: str = ""
    bundles: Tuple[Bundle, ...] = field(default_factory=tuple)

    def bundle_info(self) -> Dict[str, Dict[str, str]]:
        return {bundle.id: {"label": bundle.label} for bundle in self.bundles}

    def has_bundle(self, bundle_id: str) -> bool:
        return any(bundle.id == bundle_id for bundle in self.bundles)


class EntityTypeState(str, Enum):
    DISABLED = "disabled"
    ENABLED_NO_BUNDLES = "enabled_no_bundles"
    ENABLED_CONFIGURED = "enabled_configured"
