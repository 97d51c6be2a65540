from .base import (  # noqa: F401
    CoreBaseModel,
    TimestampedModel,
    UUIDPrimaryKeyModel,
)
from .audit import AuditLog  # noqa: F401
