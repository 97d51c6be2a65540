"""
Domain Entity
Attaches a domain affiliation field to registered entity types and keeps the
per-type / per-bundle configuration of that field in sync with admin input.
"""

# Lazy imports to avoid circular dependency issues during Django app loading.
# Import these where needed:
#   from scoping.platform.domain_entity.mapper import DomainEntityMapper
#   from scoping.platform.domain_entity.registry import entity_types

from .constants import (
    FIELD_NAME,
    Behavior,
    BEHAVIOR_AUTO,
    BEHAVIOR_USER,
)

__all__ = [
    "FIELD_NAME",
    "Behavior",
    "BEHAVIOR_AUTO",
    "BEHAVIOR_USER",
]
