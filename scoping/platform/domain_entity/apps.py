from django.apps import AppConfig
from django.conf import settings


class DomainEntityConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scoping.platform.domain_entity'
    label = 'domain_entity'
    verbose_name = 'Domain Entity Access'

    def ready(self):
        from . import signals  # noqa: F401
        from .registry import entity_types

        entries = getattr(settings, "DOMAIN_ENTITY", {}).get("ENTITY_TYPES", [])
        entity_types.load_from_settings(entries)
