"""
Call context management using ContextVars.

Provides call ID tracking across async boundaries for log correlation.
Each client operation runs with its own call ID, so concurrent calls on a
shared client never see each other's value.
"""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

call_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "call_id",
    default=None,
)


def get_call_id() -> str | None:
    """Get current call ID from context."""
    return call_id_var.get()


def generate_call_id() -> str:
    """Generate a new unique call ID."""
    return str(uuid.uuid4())


@contextmanager
def call_context(call_id: str | None = None) -> Iterator[str]:
    """Run a block with a call ID set, restoring the previous one afterwards."""
    token = call_id_var.set(call_id or generate_call_id())
    try:
        yield call_id_var.get()  # type: ignore[misc]
    finally:
        call_id_var.reset(token)
