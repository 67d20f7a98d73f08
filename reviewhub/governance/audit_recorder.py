"""Tamper-evident audit recording for data mutations. No FastAPI, no ORM."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from reviewhub.governance.audit_diff import compute_changed_fields, select_hashed_snapshot
from reviewhub.governance.audit_integrity import compute_hash, truncate_to_millis, verify_hash
from reviewhub.governance.audit_models import AuditRecord, ChangeRequest, freeze_values
from reviewhub.governance.audit_repository import RecordStore
from reviewhub.governance.audit_validator import validate_change_request
from reviewhub.governance.exceptions import AuditValidationError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditRecorder:
    """
    Turns a ChangeRequest into a hashed AuditRecord and appends it via the record store.
    Stateless between calls: secret, clock and logger are fixed at construction.
    Store failures are logged and re-raised unchanged; there is no retry.
    """

    def __init__(
        self,
        store: RecordStore,
        secret: str = "",
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._store = store
        self._secret = secret or ""
        self._clock = clock or utc_now
        self._logger = logger or logging.getLogger(__name__)
        if not self._secret:
            self._logger.warning("audit_secret_missing")

    def build_record(self, request: ChangeRequest) -> AuditRecord:
        """Validate, diff and hash a request into an unsaved AuditRecord."""
        try:
            request = validate_change_request(request)
        except AuditValidationError:
            self._logger.warning(
                "audit_validation_failed",
                extra={"table_name": request.table_name, "record_id": request.record_id},
            )
            raise

        # Detached copies: later caller mutations must not reach the hashed record.
        old_values = freeze_values(request.old_values)
        new_values = freeze_values(request.new_values)
        changed_fields = compute_changed_fields(request.operation, old_values, new_values)
        snapshot, hashed_values = select_hashed_snapshot(old_values, new_values)
        hashed_at = truncate_to_millis(self._clock())
        hash_value = compute_hash(
            request.operation,
            request.record_id,
            hashed_values,
            hashed_at,
            self._secret,
        )
        return AuditRecord(
            table_name=request.table_name,
            operation=request.operation,
            record_id=request.record_id,
            old_values=old_values,
            new_values=new_values,
            changed_fields=changed_fields,
            actor_id=request.actor_id,
            organization_id=request.organization_id,
            ip_address=request.ip_address,
            user_agent=request.user_agent,
            session_id=request.session_id,
            hash_value=hash_value,
            hashed_at=hashed_at,
            hashed_snapshot=snapshot,
        )

    async def record(self, request: ChangeRequest) -> AuditRecord:
        """Build the audit record and append it. Returns the record as persisted."""
        record = self.build_record(request)
        try:
            stored = await self._store.append(record)
        except Exception as e:
            self._logger.error(
                "audit_write_failed",
                extra={
                    "table_name": record.table_name,
                    "record_id": record.record_id,
                    "operation": record.operation.value,
                    "error": str(e),
                },
            )
            raise
        self._logger.info(
            "audit_recorded",
            extra={
                "audit_id": stored.id,
                "table_name": stored.table_name,
                "record_id": stored.record_id,
                "operation": stored.operation.value,
            },
        )
        return stored

    def verify(self, record: AuditRecord) -> bool:
        """True if the record's hash matches its hashed inputs under this recorder's secret."""
        return verify_hash(record, self._secret)
