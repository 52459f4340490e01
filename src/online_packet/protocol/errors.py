"""Errors raised while decoding wire text."""

from __future__ import annotations


class DecodeError(ValueError):
    """Wire text could not be turned into a packet."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class FieldNotFoundError(DecodeError):
    """A required field name does not occur in the text."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' not found in wire text", field)


class FieldValueError(DecodeError):
    """A field was located but its value is unusable."""
