"""
Canonical serialization and tamper-evidence hashing for audit records.

The hash input is the canonical JSON of {operation, record_id, values, timestamp}
followed by the process secret. Canonical JSON sorts keys, uses compact separators
and tags each non-JSON scalar with its kind ({"$decimal": "1.50"} never equals
"1.50"), so the digest is reproducible for a fixed timestamp and secret. Enums
with a str or int mixin serialize as their plain value.
"""

import hashlib
import hmac
import json
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID

from reviewhub.governance.audit_models import AuditOperation, AuditRecord

HASH_HEX_LENGTH = 64
# Keys starting with this prefix are reserved for type tags in canonical JSON.
TYPE_TAG_PREFIX = "$"


def _encode_value(value: Any) -> Any:
    """Tagged encoding for value kinds json cannot serialize natively, e.g. {"$decimal": "1.50"}."""
    if isinstance(value, Enum):
        return {"$enum": value.value}
    if isinstance(value, datetime):
        return {"$datetime": value.isoformat()}
    if isinstance(value, date):
        return {"$date": value.isoformat()}
    if isinstance(value, time):
        return {"$time": value.isoformat()}
    if isinstance(value, Decimal):
        return {"$decimal": str(value)}
    if isinstance(value, UUID):
        return {"$uuid": str(value)}
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Value of type {type(value).__name__} is not canonically serializable")


def canonical_json(value: Any) -> str:
    """Deterministic JSON: sorted keys, compact separators, no NaN/Infinity. Raises TypeError/ValueError."""
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
        default=_encode_value,
    )


def to_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def truncate_to_millis(moment: datetime) -> datetime:
    """Drop sub-millisecond precision so the hashed timestamp survives storage round-trips."""
    moment = to_utc(moment)
    return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and Z suffix, e.g. 2024-01-01T12:00:00.000Z."""
    moment = to_utc(moment)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def canonical_payload(
    operation: AuditOperation,
    record_id: Optional[str],
    values: Optional[Mapping[str, Any]],
    timestamp: datetime,
) -> str:
    return canonical_json(
        {
            "operation": operation.value,
            "record_id": record_id,
            "values": values,
            "timestamp": format_timestamp(timestamp),
        }
    )


def compute_hash(
    operation: AuditOperation,
    record_id: Optional[str],
    values: Optional[Mapping[str, Any]],
    timestamp: datetime,
    secret: str = "",
) -> str:
    """SHA-256 over UTF-8 of canonical payload + secret, as lowercase hex (64 chars)."""
    payload = canonical_payload(operation, record_id, values, timestamp)
    return hashlib.sha256((payload + (secret or "")).encode("utf-8")).hexdigest()


def verify_hash(record: AuditRecord, secret: str = "") -> bool:
    """Recompute the digest from the record's hashed inputs and compare in constant time."""
    try:
        expected = compute_hash(
            record.operation,
            record.record_id,
            record.hashed_values,
            record.hashed_at,
            secret,
        )
    except (TypeError, ValueError):
        return False
    return hmac.compare_digest(expected, record.hash_value)
