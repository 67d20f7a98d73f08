"""JSON log formatter: context variables and audit extra fields."""

import json
import logging

from reviewhub.config.logging import JsonFormatter, configure_logging
from reviewhub.core.context import bind_context, correlation_id_ctx


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("reviewhub.audit", logging.INFO, __file__, 1, "audit_recorded", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_context_and_extra_fields():
    with bind_context(correlation_id="corr-1", organization_id="org-1"):
        line = JsonFormatter().format(_record(audit_id="a-1", operation="CREATE"))
    data = json.loads(line)
    assert data["message"] == "audit_recorded"
    assert data["level"] == "INFO"
    assert data["correlation_id"] == "corr-1"
    assert data["organization_id"] == "org-1"
    assert data["audit_id"] == "a-1"
    assert data["operation"] == "CREATE"
    assert "error" not in data


def test_bind_context_restores_previous_values():
    with bind_context(correlation_id="outer"):
        with bind_context(correlation_id="inner"):
            assert correlation_id_ctx.get() == "inner"
        assert correlation_id_ctx.get() == "outer"
    assert correlation_id_ctx.get() is None


def test_configure_logging_installs_json_handler():
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        added = [h for h in root.handlers if h not in previous_handlers]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JsonFormatter)
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)
