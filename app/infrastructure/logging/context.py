"""Interaction context binding for structured logging.

Binds interaction-scoped metadata (correlation id, user, chat) to every
log entry made while one interaction is being handled.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(user_id="42", chat_id="42"):
        logger.info("processing_interaction")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    chat_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind interaction-scoped context to all logs within the block.

    Args:
        correlation_id: Unique interaction identifier. Generated if not provided.
        user_id: Originator identifier, when known.
        chat_id: Conversation identifier, when known.
        **extra_context: Additional key-value pairs to include in logs.

    Example:
        with bind_request_context(user_id=str(update.from_id), update_id=update.id):
            await handle(update)
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if user_id is not None:
        context["user_id"] = user_id

    if chat_id is not None:
        context["chat_id"] = chat_id

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def clear_request_context() -> None:
    """Clear all interaction-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
