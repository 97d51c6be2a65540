"""Tests for the domain access field mapper."""

from django.test import TestCase

from scoping.platform.domain_entity.constants import FIELD_NAME, DisplayContext
from scoping.platform.domain_entity.exceptions import EntityKindNotFound
from scoping.platform.domain_entity.mapper import DomainEntityMapper, field_default_domains
from scoping.platform.domain_entity.models import EntityDisplay, FieldConfig, FieldStorageConfig
from scoping.platform.domain_entity.signals import allowed_entity_types_alter
from scoping.platform.domain_entity.types import EntityTypeState


class TestEntityTypes(TestCase):

    def setUp(self):
        self.mapper = DomainEntityMapper()

    def test_only_fieldable_types_are_listed(self):
        self.assertEqual(set(self.mapper.get_entity_types()), {"event", "article", "note"})

    def test_enabled_types_follow_storage(self):
        self.assertEqual(self.mapper.get_enabled_entity_types(), {})
        self.mapper.create_field_storage("event")
        enabled = self.mapper.get_enabled_entity_types()
        self.assertEqual(list(enabled), ["event"])
        self.assertEqual(enabled["event"].label, "Event")


class TestFieldStorage(TestCase):

    def setUp(self):
        self.mapper = DomainEntityMapper()

    def test_create_is_idempotent(self):
        first = self.mapper.create_field_storage("event")
        second = self.mapper.create_field_storage("event")

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(FieldStorageConfig.objects.filter(entity_type="event").count(), 1)

    def test_storage_settings(self):
        storage = self.mapper.create_field_storage("article")

        self.assertEqual(storage.storage_id, f"article.{FIELD_NAME}")
        self.assertEqual(storage.cardinality, -1)
        self.assertTrue(storage.is_multiple)
        self.assertEqual(storage.target_type, "domain")
        self.assertEqual(storage.field_type, "entity_reference")
        self.assertFalse(storage.locked)

    def test_load_missing_storage(self):
        self.assertIsNone(self.mapper.load_field_storage("event"))
        self.assertIsNone(self.mapper.load_field("event", "conference"))

    def test_delete_missing_storage_is_noop(self):
        self.mapper.delete_field_storage("event")
        self.assertFalse(FieldStorageConfig.objects.exists())

    def test_delete_cascades_to_bundle_fields(self):
        self.mapper.add_domain_field("event", "conference")
        self.mapper.add_domain_field("event", "webinar")
        self.mapper.add_domain_field("article", "article")
        self.assertEqual(FieldConfig.objects.filter(entity_type="event").count(), 2)

        self.mapper.delete_field_storage("event")

        self.assertIsNone(self.mapper.load_field_storage("event"))
        self.assertEqual(FieldConfig.objects.filter(entity_type="event").count(), 0)
        self.assertEqual(FieldConfig.objects.filter(entity_type="article").count(), 1)

    def test_unknown_type_is_not_found(self):
        for operation in (
            lambda: self.mapper.create_field_storage("ghost"),
            lambda: self.mapper.delete_field_storage("ghost"),
            lambda: self.mapper.load_field_storage("ghost"),
            lambda: self.mapper.load_field("ghost", "ghost"),
            lambda: self.mapper.add_domain_field("ghost", "ghost"),
        ):
            with self.assertRaises(EntityKindNotFound):
                operation()

    def test_non_fieldable_type_cannot_be_enabled(self):
        with self.assertRaises(EntityKindNotFound):
            self.mapper.create_field_storage("tag")


class TestAddDomainField(TestCase):

    def setUp(self):
        self.mapper = DomainEntityMapper()

    def test_creates_storage_and_field_with_defaults(self):
        self.mapper.add_domain_field("event", "conference")

        self.assertIsNotNone(self.mapper.load_field_storage("event"))
        field = self.mapper.load_field("event", "conference")
        self.assertEqual(field.config_id, f"event.conference.{FIELD_NAME}")
        self.assertEqual(field.behavior, "auto")
        self.assertEqual(field.default_domains, [])
        self.assertFalse(field.required)
        self.assertEqual(field.label, "Domain Access")
        self.assertTrue(field.default_value_callback.endswith("field_default_domains"))
        self.assertIsNone(self.mapper.load_field("event", "webinar"))

    def test_is_idempotent(self):
        first = self.mapper.add_domain_field("event", "conference")
        first.behavior = "user"
        first.save()

        second = self.mapper.add_domain_field("event", "conference")

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(second.behavior, "user")
        self.assertEqual(FieldConfig.objects.count(), 1)

    def test_widget_on_form_display_hidden_from_view_display(self):
        self.mapper.add_domain_field("event", "conference")

        form_display = EntityDisplay.objects.get(entity_type="event", bundle="conference", context=DisplayContext.FORM)
        view_display = EntityDisplay.objects.get(entity_type="event", bundle="conference", context=DisplayContext.VIEW)
        self.assertEqual(form_display.get_component(FIELD_NAME), {"type": "options_buttons"})
        self.assertIsNone(view_display.get_component(FIELD_NAME))
        self.assertTrue(view_display.hidden[FIELD_NAME])

    def test_deleting_field_removes_display_components(self):
        field = self.mapper.add_domain_field("event", "conference")
        field.delete()

        form_display = EntityDisplay.objects.get(entity_type="event", bundle="conference", context=DisplayContext.FORM)
        self.assertIsNone(form_display.get_component(FIELD_NAME))

    def test_unknown_bundle(self):
        with self.assertRaises(EntityKindNotFound):
            self.mapper.add_domain_field("event", "meetup")
        self.assertFalse(FieldStorageConfig.objects.exists())


class TestEntityTypeState(TestCase):

    def test_transitions(self):
        mapper = DomainEntityMapper()
        self.assertEqual(mapper.get_state("event"), EntityTypeState.DISABLED)

        mapper.create_field_storage("event")
        self.assertEqual(mapper.get_state("event"), EntityTypeState.ENABLED_NO_BUNDLES)

        mapper.add_domain_field("event", "webinar")
        self.assertEqual(mapper.get_state("event"), EntityTypeState.ENABLED_CONFIGURED)

        mapper.delete_field_storage("event")
        self.assertEqual(mapper.get_state("event"), EntityTypeState.DISABLED)


class TestAllowedEntityTypes(TestCase):

    def setUp(self):
        self.mapper = DomainEntityMapper()
        field = self.mapper.add_domain_field("event", "conference")
        field.behavior = "user"
        field.default_domains = ["d1"]
        field.save()
        self.mapper.add_domain_field("article", "article")

    def test_structure(self):
        self.assertEqual(
            self.mapper.get_allowed_entity_types(),
            {
                "article": {"article": {"auto": []}},
                "event": {"conference": {"user": ["d1"]}},
            },
        )

    def test_receivers_can_alter(self):
        def drop_articles(sender, allowed_entity_types, **kwargs):
            allowed_entity_types.pop("article", None)

        allowed_entity_types_alter.connect(drop_articles)
        try:
            allowed = self.mapper.get_allowed_entity_types()
        finally:
            allowed_entity_types_alter.disconnect(drop_articles)

        self.assertEqual(list(allowed), ["event"])


class TestFieldDefaultDomains(TestCase):

    def setUp(self):
        self.field = DomainEntityMapper().add_domain_field("event", "conference")

    def test_without_configured_defaults_uses_current_domain(self):
        self.assertEqual(field_default_domains("event", "conference", current_domain_id="d2"), ["d2"])
        self.assertEqual(field_default_domains("event", "conference"), [])
        self.assertEqual(field_default_domains("event", "webinar", current_domain_id="d2"), ["d2"])

    def test_configured_defaults(self):
        self.field.default_domains = ["d1", "removed", "_active"]
        self.field.save()

        result = field_default_domains(
            "event", "conference", current_domain_id="d2", known_domains={"d1": "One", "d2": "Two"}
        )
        self.assertEqual(result, ["d1", "d2"])

    def test_only_stale_defaults_fall_back_to_current_domain(self):
        self.field.default_domains = ["removed"]
        self.field.save()

        result = field_default_domains(
            "event", "conference", current_domain_id="d2", known_domains={"d2": "Two"}
        )
        self.assertEqual(result, ["d2"])
        self.assertEqual(field_default_domains("event", "conference", known_domains={"d2": "Two"}), [])
