"""
Delta computation between the submitted and the stored configuration.
Pure functions, no database access.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping


@dataclass
class EntityTypeDelta:
    create: List[str] = field(default_factory=list)
    delete: List[str] = field(default_factory=list)

    def __bool__(self):
        return bool(self.create or self.delete)


def compute_entity_type_delta(all_types: Iterable[str], enabled_types: Iterable[str], checked: Iterable[str]) -> EntityTypeDelta:
    """
    Storages to create for newly checked types and to delete for unchecked
    enabled types. Types whose state did not change appear in neither list.
    """
    enabled = set(enabled_types)
    checked = {entity_type_id for entity_type_id in checked if entity_type_id}
    delta = EntityTypeDelta()
    for entity_type_id in all_types:
        if entity_type_id not in checked:
            if entity_type_id in enabled:
                delta.delete.append(entity_type_id)
        elif entity_type_id not in enabled:
            delta.create.append(entity_type_id)
    return delta


def filter_selected(values: Any) -> List[str]:
    """
    Keep the selected options of a multi-select value, in submission order.

    Accepts a list (``["d1", "", "d2"]``) or a checkbox mapping
    (``{"d1": "d1", "d2": 0}`` or ``{"d1": True, "d2": False}``). Empty and
    false entries are dropped.
    """
    if values is None:
        return []
    if isinstance(values, Mapping):
        # A true checkbox value selects its key.
        values = [key if value is True else value for key, value in values.items()]
    elif isinstance(values, (str, bytes)):
        values = [values]

    selected = []
    for value in values:
        if not value or value == "0":
            continue
        value = str(value)
        if value not in selected:
            selected.append(value)
    return selected


class BundleAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


def resolve_bundle_action(enabled: bool, has_field: bool) -> BundleAction:
    if not enabled:
        return BundleAction.DELETE if has_field else BundleAction.NOOP
    return BundleAction.UPDATE if has_field else BundleAction.CREATE
