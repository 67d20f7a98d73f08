"""Dependency wiring: build an AuditRecorder from settings and a database session."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.config.settings import AppSettings, get_settings
from reviewhub.governance.audit_recorder import AuditRecorder
from reviewhub.governance.exceptions import AuditConfigurationError
from reviewhub.infrastructure.database.audit_repository_db import DbAuditRepository


def get_audit_secret(settings: AppSettings) -> str:
    """Return the configured audit secret verbatim. Raises if required and missing."""
    secret = settings.audit_encryption_key
    if not secret and settings.audit_require_secret:
        raise AuditConfigurationError(
            "Audit secret is required. Set AUDIT_ENCRYPTION_KEY in environment."
        )
    return secret


def get_audit_recorder(
    session: AsyncSession,
    settings: Optional[AppSettings] = None,
) -> AuditRecorder:
    """Build AuditRecorder with a DB record store, configured secret and module logger."""
    settings = settings or get_settings()
    return AuditRecorder(
        store=DbAuditRepository(session=session),
        secret=get_audit_secret(settings),
        logger=logging.getLogger("reviewhub.audit"),
    )
