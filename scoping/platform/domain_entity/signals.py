"""
Domain Entity Signals

allowed_entity_types_alter
    Sent by DomainEntityMapper.get_allowed_entity_types() with the mutable
    ``allowed_entity_types`` dict, structured as::

        {entity_type: {bundle: {behavior: [default domain ids]}}}

    Receivers may delete an entity type to disable query altering on it, or
    change the default assignation values of its bundles. Changing the widget
    this way has no effect.
"""

import logging

from django.db.models.signals import post_delete
from django.dispatch import Signal, receiver

from .models import EntityDisplay, FieldConfig

logger = logging.getLogger(__name__)

allowed_entity_types_alter = Signal()


@receiver(post_delete, sender=FieldConfig)
def remove_field_from_displays(sender, instance, **kwargs):
    """Drop the deleted field's components from the bundle displays."""
    displays = EntityDisplay.objects.filter(
        entity_type=instance.entity_type,
        bundle=instance.bundle,
    )
    for display in displays:
        display.content.pop(instance.field_name, None)
        display.hidden.pop(instance.field_name, None)
        display.save(update_fields=["content", "hidden", "updated_at"])
    logger.info(f"Field {instance.config_id} deleted, removed from {len(displays)} display(s)")
