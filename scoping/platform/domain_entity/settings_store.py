"""Persisted module settings (the global bypass flag lives here)."""

import logging
from typing import Any

from django.conf import settings

from .constants import BYPASS_ACCESS_CONDITIONS, SETTINGS_NAME
from .models import ConfigObject

logger = logging.getLogger(__name__)


def get_settings_name() -> str:
    return getattr(settings, "DOMAIN_ENTITY", {}).get("SETTINGS_NAME", SETTINGS_NAME)


class SettingsStore:
    """
    Editable view of one named configuration object.

    Usage:
        config = SettingsStore()
        config.set("bypass_access_conditions", True).save()
    """

    def __init__(self, name: str = None):
        self.name = name or get_settings_name()
        self._object = ConfigObject.objects.filter(name=self.name).first()
        self._data = dict(self._object.data) if self._object else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> "SettingsStore":
        self._data[key] = value
        return self

    def save(self) -> None:
        if self._object is None:
            self._object, _ = ConfigObject.objects.get_or_create(name=self.name)
        self._object.data = dict(self._data)
        self._object.save(update_fields=["data", "updated_at"])
        logger.info(f"Saved configuration {self.name}: {sorted(self._data)}")


def bypass_access_conditions() -> bool:
    """Whether access filtering must skip domain scoping entirely."""
    return bool(SettingsStore().get(BYPASS_ACCESS_CONDITIONS, False))
