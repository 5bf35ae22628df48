"""Sync context - per unit-of-work activation and rendering context.

The context lives in a ContextVar, so every thread and asyncio task sees its
own activation. Prefer the scope guard, which always restores the previous
state on exit:

    with sync_enabled(render_context=view_context):
        session.commit()
"""

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any

from modelsync.config import get_settings


@dataclass(frozen=True)
class SyncContext:
    """Whether syncing is active, and the context fragments are rendered with."""

    enabled: bool = False
    render_context: Any | None = None


_sync_context_var: ContextVar[SyncContext | None] = ContextVar("sync_context", default=None)


def current_context() -> SyncContext:
    """Context of the current unit of work (settings default when none was set)."""
    context = _sync_context_var.get()
    if context is None:
        return SyncContext(enabled=get_settings().enabled_by_default)
    return context


def is_enabled() -> bool:
    return current_context().enabled


def current_render_context() -> Any | None:
    return current_context().render_context


def enable(render_context: Any | None = None) -> Token[SyncContext | None]:
    """Turn syncing on; pass the returned token to reset()."""
    return _sync_context_var.set(SyncContext(enabled=True, render_context=render_context))


def disable() -> Token[SyncContext | None]:
    """Turn syncing off; pass the returned token to reset()."""
    return _sync_context_var.set(SyncContext(enabled=False))


def reset(token: Token[SyncContext | None]) -> None:
    """Restore the context that was active before enable()/disable()."""
    _sync_context_var.reset(token)


@contextmanager
def sync_enabled(render_context: Any | None = None) -> Generator[SyncContext, None, None]:
    """Enable syncing for the enclosed block, even if it raises."""
    token = enable(render_context)
    try:
        yield current_context()
    finally:
        reset(token)


@contextmanager
def sync_disabled() -> Generator[SyncContext, None, None]:
    """Disable syncing for the enclosed block, even if it raises."""
    token = disable()
    try:
        yield current_context()
    finally:
        reset(token)
