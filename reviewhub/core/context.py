# reviewhub/core/context.py

import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
organization_id_ctx = contextvars.ContextVar("organization_id", default=None)


@contextmanager
def bind_context(
    correlation_id: Optional[str] = None,
    organization_id: Optional[str] = None,
) -> Iterator[None]:
    """Set logging context for the enclosed block; previous values are restored on exit."""
    correlation_token = correlation_id_ctx.set(correlation_id)
    organization_token = organization_id_ctx.set(organization_id)
    try:
        yield
    finally:
        organization_id_ctx.reset(organization_token)
        correlation_id_ctx.reset(correlation_token)
