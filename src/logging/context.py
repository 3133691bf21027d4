# src/logging/context.py — v1
"""Contextual logging support: attach build_id, route and step to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per build, then per step / per page while rendering.
_build_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "build_id", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)
_route: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "route", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    build_id: str | None = None
    step: str | None = None
    route: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        build_id=_build_id.get(),
        step=_step.get(),
        route=_route.get(),
    )


def set_build_context(build_id: str) -> None:
    """Set build-level context (called once per build)."""
    _build_id.set(build_id)
    _step.set(None)
    _route.set(None)


def set_step_context(step: str | None) -> None:
    _step.set(step)


def set_route_context(route: str | None) -> None:
    """Set page-level context. Each rendering task runs in its own copy."""
    _route.set(route)


def clear_context() -> None:
    """Reset all context variables."""
    _build_id.set(None)
    _step.set(None)
    _route.set(None)
