# reviewhub/infrastructure/database/models.py

import uuid

from sqlalchemy import JSON, Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func

from reviewhub.infrastructure.database.session import Base

JsonColumnType = JSON().with_variant(JSONB(), "postgresql")


class AuditEntry(Base):
    """ORM model for the append-only audit trail. Rows are inserted, never updated."""

    __tablename__ = "audit_entries"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    table_name = Column(String, nullable=False, index=True)
    record_id = Column(String, nullable=True, index=True)
    operation = Column(String(16), nullable=False)
    old_values = Column(JsonColumnType, nullable=True)
    new_values = Column(JsonColumnType, nullable=True)
    changed_fields = Column(JsonColumnType, nullable=False, default=list)

    actor_id = Column(String, nullable=True, index=True)
    organization_id = Column(String, nullable=True, index=True)
    ip_address = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)
    session_id = Column(String, nullable=True)

    hash_value = Column(String(64), nullable=False)
    hashed_at = Column(DateTime(timezone=True), nullable=False)
    hashed_snapshot = Column(String(8), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
