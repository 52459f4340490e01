"""Codec settings model."""

from __future__ import annotations

from dataclasses import dataclass

from ..protocol.framing import DecodeMode


@dataclass(frozen=True)
class WireSettings:
    """How packets are written to and read from wire text.

    ``decode_mode`` selects the reader; ``LEGACY`` matches the behaviour of
    existing peers field for field. ``escape_quotes`` backslash-escapes
    values on encode and unescapes them on decode, which only the
    tokenizing reader understands.
    """

    decode_mode: DecodeMode = DecodeMode.TOKENIZED
    escape_quotes: bool = False

    def __post_init__(self) -> None:
        try:
            mode = DecodeMode(self.decode_mode)
        except ValueError:
            raise ValueError(
                f"Unknown decode mode {self.decode_mode!r}. "
                f"Valid: {[m.value for m in DecodeMode]}"
            ) from None
        object.__setattr__(self, "decode_mode", mode)
        if not isinstance(self.escape_quotes, bool):
            raise ValueError(
                f"escape_quotes must be a bool, got {self.escape_quotes!r}"
            )
        if self.escape_quotes and mode is DecodeMode.LEGACY:
            raise ValueError("escape_quotes requires the tokenized decode mode")

    def to_dict(self) -> dict:
        return {
            "decode_mode": self.decode_mode.value,
            "escape_quotes": self.escape_quotes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WireSettings:
        return cls(
            decode_mode=data.get("decode_mode", DecodeMode.TOKENIZED),
            escape_quotes=data.get("escape_quotes", False),
        )


DEFAULT_SETTINGS = WireSettings()
LEGACY_SETTINGS = WireSettings(decode_mode=DecodeMode.LEGACY)
