"""Changed-field detection and hashed-snapshot selection. Pure functions."""

from typing import Any, Mapping, Optional, Tuple

from reviewhub.governance.audit_integrity import canonical_json
from reviewhub.governance.audit_models import AuditOperation, HashedSnapshot

_MISSING = object()


def compute_changed_fields(
    operation: AuditOperation,
    old_values: Optional[Mapping[str, Any]],
    new_values: Optional[Mapping[str, Any]],
) -> Tuple[str, ...]:
    """
    Keys of new_values whose canonical JSON differs from old_values at the same key,
    in new_values iteration order. A key absent from old_values counts as changed.
    Only UPDATE with both snapshots present yields a non-empty result.
    """
    if operation != AuditOperation.UPDATE or old_values is None or new_values is None:
        return ()
    changed = []
    for key, new_value in new_values.items():
        old_value = old_values.get(key, _MISSING)
        if old_value is _MISSING or canonical_json(old_value) != canonical_json(new_value):
            changed.append(key)
    return tuple(changed)


def select_hashed_snapshot(
    old_values: Optional[Mapping[str, Any]],
    new_values: Optional[Mapping[str, Any]],
) -> Tuple[HashedSnapshot, Optional[Mapping[str, Any]]]:
    """new_values when present and non-empty, else old_values (DELETE), else nothing."""
    if new_values:
        return HashedSnapshot.NEW, new_values
    if old_values:
        return HashedSnapshot.OLD, old_values
    return HashedSnapshot.NONE, None
