"""Structured logging helpers for extraction runs.

Every record carries the run correlation id, the CLI phase and the .scad
file being processed, taken from context variables so nested helpers never
have to pass them around.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

_UNSET = "-"

_CONTEXT_FIELDS: dict[str, contextvars.ContextVar[str]] = {
    "run_id": contextvars.ContextVar("run_id", default=_UNSET),
    "phase": contextvars.ContextVar("phase", default=_UNSET),
    "source": contextvars.ContextVar("source", default=_UNSET),
}

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | run_id=%(run_id)s | phase=%(phase)s | "
    "source=%(source)s | %(name)s | %(message)s"
)


class _RunContextFilter(logging.Filter):
    """Copy the current extraction context onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, var in _CONTEXT_FIELDS.items():
            setattr(record, name, var.get())
        return True


def configure_structured_logging(level: int = logging.INFO) -> None:
    """Install LOG_FORMAT and the context filter on the root handlers."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
        if not any(isinstance(f, _RunContextFilter) for f in handler.filters):
            handler.addFilter(_RunContextFilter())


def set_run_id(run_id: str | None = None) -> str:
    """Set or generate run correlation ID."""
    value = run_id or uuid.uuid4().hex[:12]
    _CONTEXT_FIELDS["run_id"].set(value)
    return value


def get_run_id() -> str:
    return _CONTEXT_FIELDS["run_id"].get()


@contextmanager
def _field_scope(name: str, value: str) -> Iterator[None]:
    var = _CONTEXT_FIELDS[name]
    token = var.set(value)
    try:
        yield
    finally:
        var.reset(token)


def phase_scope(phase: str):
    """Tag logs emitted inside the block with a CLI phase (config, extract, output)."""
    return _field_scope("phase", phase)


def source_scope(source: str):
    """Tag logs emitted inside the block with the file being processed."""
    return _field_scope("source", source)
