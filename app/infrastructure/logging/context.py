"""Request context binding for structured logging.

Binds request-scoped keys (correlation id, tenant, locale) so every log
entry emitted while resolving or importing translations carries them.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(tenant_id="acme", locale="fr"):
        await service.translate("greeting")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    locale: Optional[str] = None,
    user_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        tenant_id: Tenant the request acts for.
        locale: Requested locale.
        user_id: Acting user, if known.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if tenant_id is not None:
        context["tenant_id"] = tenant_id
    if locale is not None:
        context["locale"] = locale
    if user_id is not None:
        context["user_id"] = user_id

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


def clear_request_context() -> None:
    """Clear all request-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
