"""API tests for the domain entity configuration endpoints."""

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from scoping.platform.domain_entity.mapper import DomainEntityMapper
from scoping.platform.domain_entity.models import FieldConfig, FieldStorageConfig
from scoping.platform.domain_entity.settings_store import bypass_access_conditions
from scoping.platform.domains.models import Domain

User = get_user_model()

SETTINGS_URL = reverse("domain-entity-settings")


def bundle_settings_url(entity_type_id):
    return reverse("domain-entity-bundle-settings", kwargs={"entity_type_id": entity_type_id})


class DomainEntityAPITestCase(APITestCase):

    def setUp(self):
        self.admin = User.objects.create_user(username="admin", password="secret-pass-123")
        self.admin.user_permissions.add(
            Permission.objects.get(content_type__app_label="domain_entity", codename="administer_domains")
        )
        self.client.force_authenticate(self.admin)
        Domain.objects.create(domain_id="d1", hostname="one.example.com", name="One", weight=1)
        Domain.objects.create(domain_id="d2", hostname="two.example.com", name="Two", weight=2)
        self.mapper = DomainEntityMapper()


class TestAccess(DomainEntityAPITestCase):

    def test_anonymous_is_rejected(self):
        self.client.force_authenticate(None)
        response = self.client.get(SETTINGS_URL)
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))
        self.assertEqual(response.data["status"], "failure")

    def test_user_without_permission_is_forbidden(self):
        user = User.objects.create_user(username="editor", password="secret-pass-123")
        self.client.force_authenticate(user)

        response = self.client.get(SETTINGS_URL)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["errorCode"], "PERMISSION_DENIED")

    def test_disabled_type_is_not_found_even_for_superuser(self):
        superuser = User.objects.create_superuser(username="root", password="secret-pass-123", email="root@example.com")
        self.client.force_authenticate(superuser)

        response = self.client.get(bundle_settings_url("event"))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["status"], "failure")

    def test_disabled_type_is_not_found_without_permission(self):
        user = User.objects.create_user(username="editor", password="secret-pass-123")
        self.client.force_authenticate(user)

        response = self.client.get(bundle_settings_url("event"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.post(bundle_settings_url("event"), {"bundles": {}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_enabled_type_still_requires_permission(self):
        self.mapper.create_field_storage("event")
        user = User.objects.create_user(username="editor", password="secret-pass-123")
        self.client.force_authenticate(user)

        response = self.client.get(bundle_settings_url("event"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["errorCode"], "PERMISSION_DENIED")

    def test_unknown_type_is_not_found(self):
        response = self.client.post(bundle_settings_url("ghost"), {"bundles": {}}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class TestEntityTypeSettings(DomainEntityAPITestCase):

    def test_list(self):
        self.mapper.create_field_storage("event")

        response = self.client.get(SETTINGS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertFalse(data["bypass_access_conditions"])
        rows = {row["id"]: row for row in data["entity_types"]}
        self.assertNotIn("tag", rows)
        self.assertTrue(rows["event"]["enabled"])
        self.assertTrue(rows["event"]["operations"]["configure"].endswith(bundle_settings_url("event")))
        self.assertEqual(rows["article"]["operations"], {})

    def test_save_applies_delta_and_bypass_flag(self):
        self.mapper.create_field_storage("event")
        self.mapper.create_field_storage("article")

        response = self.client.post(
            SETTINGS_URL,
            {"entity_types": ["article", "note"], "bypass_access_conditions": True},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["created"], ["note"])
        self.assertEqual(response.data["data"]["deleted"], ["event"])
        self.assertEqual(set(self.mapper.get_enabled_entity_types()), {"article", "note"})
        self.assertTrue(bypass_access_conditions())

    def test_checkbox_mapping_is_accepted(self):
        response = self.client.post(
            SETTINGS_URL,
            {"entity_types": {"event": "event", "article": 0}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(list(self.mapper.get_enabled_entity_types()), ["event"])

    def test_unknown_type_is_a_validation_error(self):
        response = self.client.post(SETTINGS_URL, {"entity_types": ["ghost"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errorCode"], "VALIDATION_ERROR")
        self.assertIn("ghost", response.data["errorMessage"])
        self.assertFalse(FieldStorageConfig.objects.exists())


class TestBundleSettings(DomainEntityAPITestCase):

    def setUp(self):
        super().setUp()
        self.mapper.create_field_storage("event")

    def test_retrieve(self):
        response = self.client.get(bundle_settings_url("event"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual([bundle["id"] for bundle in data["bundles"]], ["conference", "webinar"])
        self.assertEqual(list(data["domain_options"]), ["_active", "d1", "d2"])

    def test_boolean_domain_mapping(self):
        self.mapper.add_domain_field("event", "conference")

        response = self.client.post(
            bundle_settings_url("event"),
            {"bundles": {"conference": {"enable": True, "domains": {"d1": True, "d2": False}}}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.mapper.load_field("event", "conference").default_domains, ["d1"])

    def test_domains_are_filtered_before_storing(self):
        self.mapper.add_domain_field("event", "conference")

        response = self.client.post(
            bundle_settings_url("event"),
            {"bundles": {"conference": {"enable": True, "behavior": "user", "domains": ["d2", "", False, None, "d1"]}}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["updated"], ["conference"])
        field = self.mapper.load_field("event", "conference")
        self.assertEqual(field.default_domains, ["d2", "d1"])
        self.assertEqual(field.behavior, "user")

    def test_unknown_domain_is_a_validation_error(self):
        self.mapper.add_domain_field("event", "conference")

        response = self.client.post(
            bundle_settings_url("event"),
            {"bundles": {"conference": {"enable": True, "domains": ["nope"]}}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("nope", response.data["errorMessage"])
        self.assertEqual(self.mapper.load_field("event", "conference").default_domains, [])

    def test_invalid_behavior(self):
        response = self.client.post(
            bundle_settings_url("event"),
            {"bundles": {"conference": {"enable": True, "behavior": "sometimes"}}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(FieldConfig.objects.exists())


class TestEndToEnd(DomainEntityAPITestCase):
    """Enable an entity type, configure one bundle, then disable the type."""

    def test_event_scenario(self):
        response = self.client.post(SETTINGS_URL, {"entity_types": ["event"]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(self.mapper.load_field_storage("event"))
        self.assertIn("event", self.mapper.get_enabled_entity_types())

        payload = {
            "bundles": {
                "conference": {"enable": True, "behavior": "user", "domains": ["d1"]},
                "webinar": {"enable": False, "behavior": "auto", "domains": []},
            }
        }
        # The first save adds the field, the second applies behavior and domains.
        response = self.client.post(bundle_settings_url("event"), payload, format="json")
        self.assertEqual(response.data["data"]["created"], ["conference"])
        response = self.client.post(bundle_settings_url("event"), payload, format="json")
        self.assertEqual(response.data["data"]["updated"], ["conference"])

        fields = FieldConfig.objects.filter(entity_type="event")
        self.assertEqual(fields.count(), 1)
        field = fields.get()
        self.assertEqual(field.bundle, "conference")
        self.assertEqual(field.behavior, "user")
        self.assertEqual(field.default_domains, ["d1"])
        self.assertIsNone(self.mapper.load_field("event", "webinar"))

        response = self.client.post(SETTINGS_URL, {"entity_types": []}, format="json")
        self.assertEqual(response.data["data"]["deleted"], ["event"])
        self.assertIsNone(self.mapper.load_field_storage("event"))
        self.assertFalse(FieldConfig.objects.filter(entity_type="event").exists())

        response = self.client.get(bundle_settings_url("event"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
