"""Fixtures for audit governance tests: fixed clock, fixed secret, mock record store."""

import dataclasses
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from reviewhub.governance.audit_recorder import AuditRecorder

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
SECRET = "s3cret"


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def record_store():
    """Store that assigns an id and echoes the record back."""
    store = AsyncMock()
    store.append = AsyncMock(
        side_effect=lambda record: dataclasses.replace(record, id="audit-1", created_at=FIXED_NOW)
    )
    return store


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def recorder(record_store, clock, logger):
    return AuditRecorder(store=record_store, secret=SECRET, clock=clock, logger=logger)
