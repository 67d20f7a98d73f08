"""Immutable change request and audit record models. Domain-level immutability."""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class AuditOperation(str, Enum):
    """Kinds of data mutation that produce an audit record."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class HashedSnapshot(str, Enum):
    """Which value set was used as the hashed snapshot."""

    NEW = "NEW"
    OLD = "OLD"
    NONE = "NONE"


def freeze_values(values: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    """Private read-only copy: mappings become MappingProxyType, lists become tuples, recursively."""
    if values is None:
        return None
    return _freeze(values)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return copy.deepcopy(value)


def thaw_values(value: Any) -> Any:
    """Plain dict/list structure from a frozen snapshot, for logging and export."""
    if isinstance(value, Mapping):
        return {key: thaw_values(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw_values(item) for item in value]
    return value


@dataclass(frozen=True)
class ChangeRequest:
    """
    Description of a single data mutation, built by the caller around the write.
    Absent old_values/new_values mean "no snapshot" and are treated as empty.
    """

    table_name: str
    operation: AuditOperation
    record_id: Optional[str] = None
    old_values: Optional[Mapping[str, Any]] = None
    new_values: Optional[Mapping[str, Any]] = None
    actor_id: Optional[str] = None
    organization_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    session_id: Optional[str] = None


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable audit record. hash_value is computed once from operation, record_id,
    the hashed snapshot, hashed_at and the secret; it is never recomputed from the
    stored row. id and created_at are assigned by the store on append.
    """

    table_name: str
    operation: AuditOperation
    hash_value: str
    hashed_at: datetime
    hashed_snapshot: HashedSnapshot
    record_id: Optional[str] = None
    old_values: Optional[Mapping[str, Any]] = None
    new_values: Optional[Mapping[str, Any]] = None
    changed_fields: Tuple[str, ...] = field(default_factory=tuple)
    actor_id: Optional[str] = None
    organization_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    session_id: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def hashed_values(self) -> Optional[Mapping[str, Any]]:
        """The value set that entered the hash, per hashed_snapshot."""
        if self.hashed_snapshot == HashedSnapshot.NEW:
            return self.new_values
        if self.hashed_snapshot == HashedSnapshot.OLD:
            return self.old_values
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging and export."""
        return {
            "id": self.id,
            "table_name": self.table_name,
            "record_id": self.record_id,
            "operation": self.operation.value,
            "old_values": thaw_values(self.old_values),
            "new_values": thaw_values(self.new_values),
            "changed_fields": list(self.changed_fields),
            "actor_id": self.actor_id,
            "organization_id": self.organization_id,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "session_id": self.session_id,
            "hash_value": self.hash_value,
            "hashed_at": self.hashed_at.isoformat(),
            "hashed_snapshot": self.hashed_snapshot.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
