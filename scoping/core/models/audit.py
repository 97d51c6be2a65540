"""Audit logging primitives."""
from django.conf import settings
from django.db import models
from django.utils import timezone

from .base import CoreBaseModel


class AuditLog(CoreBaseModel):
    """Tracks configuration changes made by administrators."""

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="audit_logs",
    )

    # Configuration records are keyed by composite string ids, not UUIDs.
    target_type = models.CharField(max_length=64, blank=True)
    target_id = models.CharField(max_length=255, blank=True)

    action = models.CharField(max_length=64)
    description = models.TextField(blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "core_audit_logs"
        indexes = [
            models.Index(fields=["target_type", "action"], name="core_audit_target_action_idx"),
            models.Index(fields=["created_at"], name="core_audit_created_at_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        ts = self.created_at.astimezone(timezone.utc) if self.created_at else ""
        actor = getattr(self.actor, "username", None) or "system"
        return f"[{ts}] {actor} -> {self.action}"
