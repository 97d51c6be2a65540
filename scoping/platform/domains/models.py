"""Domain registry models."""
from django.db import models

from scoping.core.models import CoreBaseModel


class Domain(CoreBaseModel):
    """A site served by the platform that content can be affiliated to."""

    domain_id = models.SlugField(max_length=64, unique=True, help_text="Machine name")
    hostname = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=120)
    weight = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True, db_index=True)
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = "platform_domains"
        ordering = ["weight", "name"]

    def __str__(self):
        return f"{self.name} ({self.hostname})"
