"""
Domain Entity Serializers
Validate submissions of the two configuration screens.
"""

from rest_framework import serializers

from .constants import Behavior
from .reconciler import filter_selected


class SelectionField(serializers.Field):
    """
    Multi-select value: a list of ids or a checkbox mapping {id: id | 0 | bool}.
    Empty and false selections are dropped, order is kept.
    """

    default_error_messages = {
        "invalid": "Expected a list of ids or a mapping of selections.",
    }

    def to_internal_value(self, data):
        if not isinstance(data, (list, tuple, dict)):
            self.fail("invalid")
        return filter_selected(data)

    def to_representation(self, value):
        return list(value or [])


class EntityTypeSettingsSerializer(serializers.Serializer):
    """Entity type table plus the global bypass checkbox."""

    bypass_access_conditions = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Disable access rules from this module (troubleshooting). Entities become accessible on all domains.",
    )
    entity_types = SelectionField(
        required=False,
        default=list,
        help_text="Entity types that must carry the domain access field",
    )

    def validate_entity_types(self, value):
        available = self.context.get("entity_types", {})
        unknown = [entity_type_id for entity_type_id in value if entity_type_id not in available]
        if unknown:
            raise serializers.ValidationError(f"Unknown entity types: {', '.join(unknown)}")
        return value


class BundleValuesSerializer(serializers.Serializer):
    enable = serializers.BooleanField(required=False, default=False)
    behavior = serializers.ChoiceField(choices=Behavior.choices, required=False)
    domains = SelectionField(
        required=False,
        help_text="Default domain(s). When none is selected the entity is available on all domains.",
    )

    def validate_domains(self, value):
        options = self.context.get("domain_options", {})
        unknown = [domain_id for domain_id in value if domain_id not in options]
        if unknown:
            raise serializers.ValidationError(f"Unknown domains: {', '.join(unknown)}")
        return value


class BundleSettingsSerializer(serializers.Serializer):
    bundles = serializers.DictField(child=BundleValuesSerializer(), required=False, default=dict)
