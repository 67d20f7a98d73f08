"""DB-backed record store. Appends audit records to PostgreSQL (audit_entries table)."""

import dataclasses
import json
from datetime import timezone
from typing import Any, Mapping, Optional

from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.governance.audit_integrity import canonical_json
from reviewhub.governance.audit_models import AuditRecord
from reviewhub.governance.exceptions import StoreUnavailableError, StoreWriteFailedError
from reviewhub.infrastructure.database.models import AuditEntry

_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


def _to_json_column(values: Optional[Mapping[str, Any]]) -> Optional[Any]:
    """Plain JSON structure using the same value encoding as the hash."""
    if values is None:
        return None
    return json.loads(canonical_json(values))


class DbAuditRepository:
    """Appends audit records to PostgreSQL. Implements RecordStore protocol."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, record: AuditRecord) -> AuditRecord:
        """Insert one row and commit. Returns the record with id and created_at set; no read-back after commit."""
        orm = AuditEntry(
            table_name=record.table_name,
            record_id=record.record_id,
            operation=record.operation.value,
            old_values=_to_json_column(record.old_values),
            new_values=_to_json_column(record.new_values),
            changed_fields=list(record.changed_fields),
            actor_id=record.actor_id,
            organization_id=record.organization_id,
            ip_address=record.ip_address,
            user_agent=record.user_agent,
            session_id=record.session_id,
            hash_value=record.hash_value,
            hashed_at=record.hashed_at,
            hashed_snapshot=record.hashed_snapshot.value,
        )
        try:
            self._session.add(orm)
            # id (client default) and created_at (eager server default) are populated by flush.
            await self._session.flush()
            row_id = orm.id
            created_at = orm.created_at
            await self._session.commit()
        except _UNAVAILABLE_ERRORS as e:
            await self._session.rollback()
            raise StoreUnavailableError(f"Audit store unavailable: {e}", cause=e) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise StoreWriteFailedError(f"Audit write failed: {e}", cause=e) from e

        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return dataclasses.replace(
            record,
            id=str(row_id) if row_id is not None else None,
            created_at=created_at,
        )
