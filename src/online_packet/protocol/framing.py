"""Wire text framing: render and read the quasi-JSON packet envelope.

Wire layout (single line, fixed key order)::

    {"command":"<tag>", "data":" <payload>", "packetID":"<id>", "authID":"<id>"}

- The ``data`` value always starts with one template space that is not
  part of the payload.
- Values are interpolated as-is. Nothing is escaped unless the caller asks
  for it, so a value holding ``"`` cannot be read back.
- Absent identifiers are written as the literal ``null``.

Two readers are provided. :func:`scan_field` is the name-seek/quote-scan
reader that existing peers speak: it finds the first occurrence of a field
name anywhere in the text, so a value mentioning another field's name
(``"data":" see command"``) derails it. :func:`tokenize_frame` walks the
text once, pair by pair, and does not care about key order or value
contents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .errors import FieldNotFoundError, FieldValueError

logger = logging.getLogger(__name__)

FIELD_COMMAND = "command"
FIELD_DATA = "data"
FIELD_PACKET_ID = "packetID"
FIELD_AUTHOR_ID = "authID"

# Order the fields are written in
FIELD_ORDER = (FIELD_COMMAND, FIELD_DATA, FIELD_PACKET_ID, FIELD_AUTHOR_ID)
# Order the legacy reader seeks them in
SCAN_ORDER = (FIELD_DATA, FIELD_COMMAND, FIELD_AUTHOR_ID, FIELD_PACKET_ID)

WIRE_TEMPLATE = (
    '{{"command":"{command}", "data":" {data}", '
    '"packetID":"{packet_id}", "authID":"{author_id}"}}'
)
DATA_PREFIX = " "
NULL_TEXT = "null"

# Characters between the end of a field name and its value: '":"'
_VALUE_OFFSET = 3


class DecodeMode(str, Enum):
    """How wire text is read back."""

    LEGACY = "legacy"
    TOKENIZED = "tokenized"


@dataclass(frozen=True)
class WireFrame:
    """Raw field values of one wire text, before type coercion."""

    command: str
    data: str
    packet_id: str
    author_id: str


def escape_value(value: str) -> str:
    """Backslash-escape ``\\`` and ``"`` so the tokenizer can read them."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def render_frame(
    command: str,
    data: str,
    packet_id: str,
    author_id: str,
    escape_quotes: bool = False,
) -> str:
    """Fill the wire template with already-stringified field values.

    Args:
        command: Raw command tag.
        data: Payload text, without the template space.
        packet_id: Packet identifier text.
        author_id: Author identifier text, ``"null"`` when absent.
        escape_quotes: Escape quotes and backslashes inside values.

    Returns:
        The wire text.
    """
    values = {
        "command": command,
        "data": data,
        "packet_id": packet_id,
        "author_id": author_id,
    }
    if escape_quotes:
        values = {key: escape_value(val) for key, val in values.items()}
    return WIRE_TEMPLATE.format(**values)


def scan_field(text: str, field: str) -> str:
    """Read one field with the name-seek/quote-scan algorithm.

    The value starts three characters past the first occurrence of
    ``field`` and runs up to the next ``"``.

    Raises:
        FieldNotFoundError: ``field`` does not occur in ``text``.
        FieldValueError: No closing quote follows the value start.
    """
    index = text.find(field)
    if index < 0:
        raise FieldNotFoundError(field)

    start = index + len(field) + _VALUE_OFFSET
    end = text.find('"', start) if start <= len(text) else -1
    if end < 0:
        raise FieldValueError(f"Unterminated value for field '{field}'", field)
    return text[start:end]


class _Tokenizer:
    """Single forward pass over ``{"key":"value", ...}``."""

    def __init__(self, text: str, escaped: bool) -> None:
        self.text = text
        self.escaped = escaped
        self.pos = 0

    def fail(self, expected: str, field: str | None = None) -> FieldValueError:
        found = repr(self.text[self.pos]) if self.pos < len(self.text) else "end of text"
        return FieldValueError(
            f"Expected {expected} at offset {self.pos}, found {found}", field
        )

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str, field: str | None = None) -> None:
        self.skip_whitespace()
        if self.peek() != char:
            raise self.fail(repr(char), field)
        self.pos += 1

    def read_string(self, field: str | None = None) -> str:
        self.expect('"', field)
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if (
                self.escaped
                and char == "\\"
                and self.pos + 1 < len(self.text)
                and self.text[self.pos + 1] in '"\\'
            ):
                chars.append(self.text[self.pos + 1])
                self.pos += 2
                continue
            self.pos += 1
            if char == '"':
                return "".join(chars)
            chars.append(char)
        if field is None:
            raise FieldValueError(f"Unterminated key at offset {self.pos}")
        raise FieldValueError(f"Unterminated value for field '{field}'", field)

    def read_pairs(self) -> dict[str, str]:
        pairs: dict[str, str] = {}
        self.expect("{")
        self.skip_whitespace()
        if self.peek() == "}":
            self.pos += 1
        else:
            while True:
                key = self.read_string()
                self.expect(":", key)
                value = self.read_string(key)
                if key in pairs:
                    raise FieldValueError(f"Duplicate field '{key}'", key)
                pairs[key] = value
                self.skip_whitespace()
                if self.peek() == ",":
                    self.pos += 1
                    continue
                self.expect("}")
                break
        self.skip_whitespace()
        if self.pos != len(self.text):
            raise self.fail("end of text")
        return pairs


def tokenize_frame(text: str, escaped: bool = False) -> dict[str, str]:
    """Split wire text into its ``key -> raw value`` pairs.

    Args:
        text: Wire text.
        escaped: Honour ``\\"`` and ``\\\\`` inside values.

    Raises:
        FieldValueError: On any structural problem or a repeated key.
    """
    return _Tokenizer(text, escaped).read_pairs()


def _strip_data_prefix(raw: str) -> str:
    if raw.startswith(DATA_PREFIX):
        return raw[len(DATA_PREFIX):]
    return raw


def read_frame(
    text: str,
    mode: DecodeMode = DecodeMode.TOKENIZED,
    escaped: bool = False,
) -> WireFrame:
    """Extract the four raw field values from wire text.

    Args:
        text: Wire text.
        mode: Reader to use.
        escaped: Values were written with ``escape_quotes``. Only the
            tokenizer understands escapes.

    Returns:
        A :class:`WireFrame` with the template space removed from ``data``.

    Raises:
        DecodeError: A field is missing or unreadable.
    """
    mode = DecodeMode(mode)
    if mode is DecodeMode.LEGACY:
        values = {field: scan_field(text, field) for field in SCAN_ORDER}
    else:
        values = tokenize_frame(text, escaped=escaped)
        for field in FIELD_ORDER:
            if field not in values:
                raise FieldNotFoundError(field)

    frame = WireFrame(
        command=values[FIELD_COMMAND],
        data=_strip_data_prefix(values[FIELD_DATA]),
        packet_id=values[FIELD_PACKET_ID],
        author_id=values[FIELD_AUTHOR_ID],
    )
    logger.debug("Read %s frame: %r", mode.value, frame)
    return frame
