"""Identifier generation and display helpers."""

from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[], uuid.UUID]

SHORT_ID_LENGTH = 12

_id_factory: IdFactory = uuid.uuid4


def set_id_factory(factory: IdFactory) -> None:
    """Replace the process-wide identifier factory (e.g. in tests)."""
    global _id_factory
    _id_factory = factory


def reset_id_factory() -> None:
    """Restore the default random identifier factory."""
    global _id_factory
    _id_factory = uuid.uuid4


def new_id(factory: IdFactory | None = None) -> uuid.UUID:
    """Draw a fresh identifier from ``factory`` or the process-wide one."""
    return (factory or _id_factory)()


def shorten_id(value: uuid.UUID | None) -> str:
    """Last 12 characters of an identifier, or ``"null"``.

    For log lines only. Short forms are not unique and must never be
    used as keys.
    """
    if value is None:
        return "null"
    text = str(value)
    return text[-SHORT_ID_LENGTH:]
