"""Helpers for writing audit logs."""
from typing import Optional, Mapping, Any

from scoping.core.models import AuditLog


def record_audit(*, actor=None, target_type: str = "", target_id: str = "", action: str, description: str = "", metadata: Optional[Mapping[str, Any]] = None) -> AuditLog:
    metadata = dict(metadata or {})
    if actor is not None and not getattr(actor, "is_authenticated", False):
        actor = None
    return AuditLog.objects.create(
        actor=actor,
        target_type=target_type,
        target_id=target_id,
        action=action,
        description=description,
        metadata=metadata,
    )
