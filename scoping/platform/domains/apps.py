from django.apps import AppConfig


class DomainsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scoping.platform.domains'
    label = 'domains'
    verbose_name = 'Domain Registry'
