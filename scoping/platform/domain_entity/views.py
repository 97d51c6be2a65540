"""
Domain entity configuration endpoints:
1. Entity types table + bypass flag
2. Bundle settings of one domain enabled entity type
"""
import logging

from rest_framework import permissions, viewsets
from rest_framework.reverse import reverse
from drf_spectacular.utils import extend_schema

from scoping.utils.response import api_response

from .permissions import CanAdministerDomains
from .serializers import BundleSettingsSerializer, EntityTypeSettingsSerializer
from .services import BundleSettingsService, EntityTypeSettingsService, get_domain_options

logger = logging.getLogger(__name__)


@extend_schema(tags=["Domain Entity"])
class DomainEntitySettingsViewSet(viewsets.ViewSet):
    """
    Domain access configuration. Errors (unknown or disabled entity type,
    invalid input, database failures) are rendered by the global exception
    handler.
    """

    permission_classes = [permissions.IsAuthenticated, CanAdministerDomains]

    def check_permissions(self, request):
        # Unknown or disabled entity types are not found, whoever asks.
        entity_type_id = self.kwargs.get("entity_type_id")
        if entity_type_id is not None:
            BundleSettingsService().get_enabled_definition(entity_type_id)
        super().check_permissions(request)

    def _entity_types_data(self, request, service):
        data = service.build()
        for row in data["entity_types"]:
            row["operations"] = {}
            if row["enabled"]:
                row["operations"]["configure"] = reverse(
                    "domain-entity-bundle-settings",
                    kwargs={"entity_type_id": row["id"]},
                    request=request,
                )
        return data

    @extend_schema(
        summary="List entity types and their domain access state",
        description="Returns every fieldable entity type with its enabled state and the global bypass flag",
    )
    def list(self, request):
        service = EntityTypeSettingsService()
        return api_response(200, "success", self._entity_types_data(request, service))

    @extend_schema(
        summary="Enable or disable domain access on entity types",
        description="Creates the domain access field storage for newly checked entity types and deletes it for unchecked ones",
        request=EntityTypeSettingsSerializer,
    )
    def create(self, request):
        service = EntityTypeSettingsService()
        serializer = EntityTypeSettingsSerializer(
            data=request.data,
            context={"entity_types": service.mapper.get_entity_types()},
        )
        serializer.is_valid(raise_exception=True)

        delta = service.save(
            checked=serializer.validated_data["entity_types"],
            bypass_access_conditions=serializer.validated_data["bypass_access_conditions"],
            actor=request.user,
        )
        data = self._entity_types_data(request, service)
        data["created"] = delta.create
        data["deleted"] = delta.delete
        return api_response(200, "success", data)

    @extend_schema(
        summary="Get bundle settings of an entity type",
        description="Per bundle enable state, behavior and default domains. 404 when the entity type is unknown or not domain enabled.",
    )
    def retrieve(self, request, entity_type_id=None):
        service = BundleSettingsService()
        return api_response(200, "success", service.build(entity_type_id))

    @extend_schema(
        summary="Save bundle settings of an entity type",
        description=(
            "Adds, updates or deletes the domain access field per bundle. A newly enabled bundle "
            "gets the default behavior and no default domains; save again to customize them."
        ),
        request=BundleSettingsSerializer,
    )
    def save_bundles(self, request, entity_type_id=None):
        service = BundleSettingsService()
        serializer = BundleSettingsSerializer(
            data=request.data,
            context={"domain_options": get_domain_options(service.loader)},
        )
        serializer.is_valid(raise_exception=True)

        results = service.save(entity_type_id, serializer.validated_data["bundles"], actor=request.user)
        data = service.build(entity_type_id)
        data.update(results)
        return api_response(200, "success", data)
