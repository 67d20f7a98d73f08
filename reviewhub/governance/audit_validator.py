"""Validators for change requests. Pure functions, no infrastructure or DB access."""

import dataclasses
from collections.abc import Mapping
from typing import Any, Optional

from reviewhub.governance.audit_integrity import TYPE_TAG_PREFIX, canonical_json
from reviewhub.governance.audit_models import AuditOperation, ChangeRequest
from reviewhub.governance.exceptions import AuditValidationError

_CONTEXT_FIELDS = ("record_id", "actor_id", "organization_id", "ip_address", "user_agent", "session_id")


def validate_operation(operation: Any) -> AuditOperation:
    """Coerce to AuditOperation. Raises AuditValidationError for unknown kinds."""
    if isinstance(operation, AuditOperation):
        return operation
    try:
        return AuditOperation(operation)
    except ValueError as e:
        allowed = ", ".join(op.value for op in AuditOperation)
        raise AuditValidationError(
            f"operation must be one of {allowed}, got {operation!r}"
        ) from e


def validate_table_name(table_name: Any) -> None:
    if not isinstance(table_name, str) or not table_name.strip():
        raise AuditValidationError("table_name must be a non-empty string")


def _reject_reserved_keys(name: str, value: Any) -> None:
    """Keys with the type-tag prefix would be indistinguishable from tagged scalars."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            if isinstance(key, str) and key.startswith(TYPE_TAG_PREFIX):
                raise AuditValidationError(
                    f"{name} keys must not start with {TYPE_TAG_PREFIX!r}, got {key!r}"
                )
            _reject_reserved_keys(name, item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _reject_reserved_keys(name, item)


def validate_values(name: str, values: Optional[Any]) -> None:
    """Values must be a mapping with string keys whose contents are canonically serializable."""
    if values is None:
        return
    if not isinstance(values, Mapping):
        raise AuditValidationError(f"{name} must be a mapping, got {type(values).__name__}")
    for key in values:
        if not isinstance(key, str):
            raise AuditValidationError(f"{name} keys must be strings, got {key!r}")
    try:
        canonical_json(values)
    except (TypeError, ValueError) as e:
        raise AuditValidationError(f"{name} must be JSON-serializable: {e}") from e
    _reject_reserved_keys(name, values)


def validate_change_request(request: ChangeRequest) -> ChangeRequest:
    """
    Validate a change request before hashing. Returns the request with operation
    coerced to AuditOperation. Raises AuditValidationError on violation.
    """
    operation = validate_operation(request.operation)
    validate_table_name(request.table_name)
    validate_values("old_values", request.old_values)
    validate_values("new_values", request.new_values)
    for field_name in _CONTEXT_FIELDS:
        value = getattr(request, field_name)
        if value is not None and not isinstance(value, str):
            raise AuditValidationError(f"{field_name} must be a string when set")
    if operation is request.operation:
        return request
    return dataclasses.replace(request, operation=operation)
