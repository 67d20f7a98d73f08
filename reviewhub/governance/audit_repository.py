"""Record store protocol. Governance layer depends on this; infrastructure implements it."""

from typing import Protocol

from reviewhub.governance.audit_models import AuditRecord


class RecordStore(Protocol):
    """Protocol for append-only persistence of audit records."""

    async def append(self, record: AuditRecord) -> AuditRecord:
        """
        Persist an audit record and return it as stored (with id/created_at if assigned).
        Must not reorder, merge or mutate fields. Raises RecordStoreError subclasses on failure.
        """
        ...
