"""Governance: tamper-evident audit recording. No FastAPI."""

from reviewhub.governance.audit_models import (
    AuditOperation,
    AuditRecord,
    ChangeRequest,
    HashedSnapshot,
)
from reviewhub.governance.audit_recorder import AuditRecorder
from reviewhub.governance.audit_repository import RecordStore
from reviewhub.governance.exceptions import (
    AuditConfigurationError,
    AuditError,
    AuditValidationError,
    RecordStoreError,
    StoreUnavailableError,
    StoreWriteFailedError,
)

__all__ = [
    "AuditOperation",
    "AuditRecord",
    "AuditRecorder",
    "ChangeRequest",
    "HashedSnapshot",
    "RecordStore",
    "AuditError",
    "AuditValidationError",
    "AuditConfigurationError",
    "RecordStoreError",
    "StoreUnavailableError",
    "StoreWriteFailedError",
]
