"""Conversion between raw wire values and payload/identifier objects."""

from __future__ import annotations

import uuid

from .errors import FieldValueError
from .framing import FIELD_AUTHOR_ID, NULL_TEXT

Payload = float | str | None


def format_payload(payload: Payload) -> str:
    """Text form of a payload as written into the ``data`` field."""
    if payload is None:
        return NULL_TEXT
    return str(payload)


def parse_payload(raw: str) -> float | str:
    """Recover a payload from its ``data`` text.

    Anything that reads as a float literal comes back as ``float``, even
    if it was sent as a string (``"42"`` decodes to ``42.0``). Everything
    else is returned unchanged as ``str``.
    """
    # Digit grouping is Python-only syntax; peers would send it as text
    if "_" in raw:
        return raw
    try:
        return float(raw)
    except ValueError:
        return raw


def format_identifier(value: uuid.UUID | None) -> str:
    if value is None:
        return NULL_TEXT
    return str(value)


def parse_identifier(
    raw: str, field: str = FIELD_AUTHOR_ID, nullable: bool = True
) -> uuid.UUID | None:
    """Parse an identifier field.

    Args:
        raw: Field text.
        field: Field name, reported in errors.
        nullable: Whether the literal ``null`` is allowed.

    Raises:
        FieldValueError: Text is not a UUID, or ``null`` where not allowed.
    """
    if raw == NULL_TEXT:
        if nullable:
            return None
        raise FieldValueError(f"Field '{field}' must not be null", field)
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise FieldValueError(
            f"Field '{field}' is not a valid identifier: {raw!r}", field
        ) from None
