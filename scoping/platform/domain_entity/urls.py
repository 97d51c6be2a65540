from django.urls import path

from .views import DomainEntitySettingsViewSet

entity_type_settings = DomainEntitySettingsViewSet.as_view({"get": "list", "post": "create"})
bundle_settings = DomainEntitySettingsViewSet.as_view({"get": "retrieve", "post": "save_bundles"})

urlpatterns = [
    path("domain-entity/settings/", entity_type_settings, name="domain-entity-settings"),
    path(
        "domain-entity/settings/<str:entity_type_id>/",
        bundle_settings,
        name="domain-entity-bundle-settings",
    ),
]
