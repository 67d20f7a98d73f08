"""Audit-layer exceptions. Typed, no HTTP."""

from typing import Optional


class AuditError(Exception):
    """Base for all audit-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuditValidationError(AuditError):
    """Raised when a change request is malformed. Nothing is hashed or stored."""


class AuditConfigurationError(AuditError):
    """Raised when the audit secret is required but not configured."""


class RecordStoreError(AuditError):
    """Base for record store failures. Keeps the underlying storage error on `cause`."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class StoreUnavailableError(RecordStoreError):
    """Raised when the store cannot be reached (connectivity, timeout)."""


class StoreWriteFailedError(RecordStoreError):
    """Raised when the store rejects the append (constraint, serialization, other write errors)."""
