"""Change request validation: rejected before hashing."""

from types import MappingProxyType

import pytest

from reviewhub.governance.audit_models import AuditOperation, ChangeRequest
from reviewhub.governance.audit_validator import validate_change_request, validate_operation
from reviewhub.governance.exceptions import AuditValidationError


def _request(**overrides) -> ChangeRequest:
    fields = {"table_name": "reviews", "operation": AuditOperation.CREATE}
    fields.update(overrides)
    return ChangeRequest(**fields)


def test_valid_request_is_returned_as_is():
    request = _request(new_values={"a": 1})
    assert validate_change_request(request) is request


def test_operation_string_is_coerced():
    validated = validate_change_request(_request(operation="DELETE"))
    assert validated.operation is AuditOperation.DELETE


@pytest.mark.parametrize("operation", ["upsert", "update", "", None, 3])
def test_unknown_operation_raises(operation):
    with pytest.raises(AuditValidationError) as exc_info:
        validate_operation(operation)
    assert "CREATE" in exc_info.value.message


@pytest.mark.parametrize("table_name", ["", "   ", None])
def test_table_name_required(table_name):
    with pytest.raises(AuditValidationError):
        validate_change_request(_request(table_name=table_name))


def test_values_must_be_mapping():
    with pytest.raises(AuditValidationError):
        validate_change_request(_request(new_values=[("a", 1)]))


def test_values_keys_must_be_strings():
    with pytest.raises(AuditValidationError):
        validate_change_request(_request(old_values={1: "a"}))


def test_values_must_be_serializable():
    with pytest.raises(AuditValidationError) as exc_info:
        validate_change_request(_request(new_values={"blob": object()}))
    assert "new_values" in exc_info.value.message


def test_read_only_mappings_are_accepted():
    request = _request(new_values=MappingProxyType({"a": 1}))
    assert validate_change_request(request) is request


def test_context_fields_must_be_strings():
    with pytest.raises(AuditValidationError):
        validate_change_request(_request(actor_id=42))


@pytest.mark.parametrize(
    "values",
    [
        {"$decimal": "1.50"},
        {"nested": {"$uuid": "x"}},
        {"rows": [{"$date": "2024-01-02"}]},
    ],
)
def test_type_tag_keys_are_reserved(values):
    with pytest.raises(AuditValidationError) as exc_info:
        validate_change_request(_request(new_values=values))
    assert "$" in exc_info.value.message


def test_circular_values_are_rejected():
    values = {"a": 1}
    values["self"] = values
    with pytest.raises(AuditValidationError):
        validate_change_request(_request(new_values=values))
