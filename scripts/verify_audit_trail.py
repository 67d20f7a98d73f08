# scripts/verify_audit_trail.py
import sys
from pathlib import Path
from sqlalchemy import select

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import logging
from reviewhub.config.logging import configure_logging
from reviewhub.config.settings import get_settings
from reviewhub.dependencies import get_audit_secret
from reviewhub.governance.audit_integrity import verify_hash
from reviewhub.governance.audit_models import AuditOperation, AuditRecord, HashedSnapshot
from reviewhub.infrastructure.database.models import AuditEntry
from reviewhub.infrastructure.database.session import get_sessionmaker


logger = logging.getLogger("reviewhub.audit.verify")


def _to_record(row: AuditEntry) -> AuditRecord:
    return AuditRecord(
        id=str(row.id),
        table_name=row.table_name,
        record_id=row.record_id,
        operation=AuditOperation(row.operation),
        old_values=row.old_values,
        new_values=row.new_values,
        changed_fields=tuple(row.changed_fields or ()),
        hash_value=row.hash_value,
        hashed_at=row.hashed_at,
        hashed_snapshot=HashedSnapshot(row.hashed_snapshot),
        created_at=row.created_at,
    )

async def verify_all():
    settings = get_settings()
    configure_logging(settings.log_level)
    secret = get_audit_secret(settings)
    tampered = 0
    async with get_sessionmaker()() as session:
        result = await session.execute(select(AuditEntry).order_by(AuditEntry.created_at))
        for row in result.scalars():
            if not verify_hash(_to_record(row), secret):
                tampered += 1
                logger.warning(
                    "audit_hash_mismatch",
                    extra={"audit_id": str(row.id), "table_name": row.table_name, "record_id": row.record_id},
                )
    print("Tampered entries:", tampered)
    return tampered

sys.exit(1 if asyncio.run(verify_all()) else 0)
