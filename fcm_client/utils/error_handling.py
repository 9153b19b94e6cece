"""
Error handling utilities for fcm-client.

Provides a decorator for consistent logging of failed client operations.
Errors are always re-raised unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fcm_client.utils.redaction import redact_dict
from fcm_client.utils.request_context import call_context

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_errors(
    operation_name: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async client operations.

    Runs the operation under a fresh call ID and logs any exception with
    structured context (operation name, function name, error type and the
    exception's redacted ``context``). The exception is re-raised.

    Args:
        operation_name: Name of the operation for logging context

    Example:
        @log_errors("send")
        async def send(self, message: Message) -> MessageOutput:
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            with call_context():
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Error in {operation_name}",
                        extra={
                            "operation": operation_name,
                            "error_type": type(e).__name__,
                            "function": func.__name__,
                            "error_context": redact_dict(getattr(e, "context", {}) or {}),
                        },
                    )
                    raise

        return wrapper

    return decorator
