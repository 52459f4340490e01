"""Packet model: the envelope peers send each other, and its wire codec.

A packet carries a :class:`Command`, a payload, the author's identifier
and its own identifier. Packets are immutable and compare by
``packet_id`` alone; ``author_id`` records provenance, not identity.

Only ``float`` and ``str`` payloads survive a round trip unchanged.
``int`` payloads are stored as ``float`` at construction, ``None`` comes
back as the text ``"null"``, and a string that reads as a number comes
back as ``float``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from ..protocol.commands import Command, DefaultCommands
from ..protocol.errors import DecodeError
from ..protocol.framing import FIELD_AUTHOR_ID, FIELD_PACKET_ID, read_frame, render_frame
from ..protocol.parser import (
    Payload,
    format_identifier,
    format_payload,
    parse_identifier,
    parse_payload,
)
from ..utils.identifiers import IdFactory, new_id, shorten_id
from .settings import DEFAULT_SETTINGS, WireSettings

logger = logging.getLogger(__name__)

PAYLOAD_TYPES = (float, int, str, type(None))


@dataclass(frozen=True, eq=False)
class Packet:
    """A single message envelope."""

    command: Command
    payload: Payload
    author_id: uuid.UUID | None
    packet_id: uuid.UUID

    def __post_init__(self) -> None:
        if not isinstance(self.command, Command):
            raise TypeError(
                f"command must be a Command, got {type(self.command).__name__}"
            )
        # bool is an int subclass but has no agreed text form on the wire
        if isinstance(self.payload, bool) or not isinstance(self.payload, PAYLOAD_TYPES):
            raise TypeError(
                "payload must be float, int, str or None, "
                f"got {type(self.payload).__name__}"
            )
        if isinstance(self.payload, int):
            try:
                object.__setattr__(self, "payload", float(self.payload))
            except OverflowError:
                raise ValueError(
                    "integer payload is too large to send as a number"
                ) from None
        if self.author_id is not None and not isinstance(self.author_id, uuid.UUID):
            raise TypeError(
                f"author_id must be a UUID or None, got {type(self.author_id).__name__}"
            )
        if not isinstance(self.packet_id, uuid.UUID):
            raise TypeError(
                f"packet_id must be a UUID, got {type(self.packet_id).__name__}"
            )

    # ─── CONSTRUCTION ─────────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        command: Command,
        payload: Payload | int,
        author_id: uuid.UUID | None,
        id_factory: IdFactory | None = None,
    ) -> Packet:
        """New packet with a freshly generated ``packet_id``."""
        return cls(command, payload, author_id, new_id(id_factory))

    @classmethod
    def from_tag(
        cls,
        tag: str,
        payload: Payload | int,
        author_id: uuid.UUID | None,
        id_factory: IdFactory | None = None,
    ) -> Packet:
        """New packet for a raw command tag."""
        return cls.create(Command(tag), payload, author_id, id_factory)

    @classmethod
    def simple_text(
        cls,
        message: str,
        author_id: uuid.UUID | None,
        id_factory: IdFactory | None = None,
    ) -> Packet:
        """New plain text message packet."""
        return cls.create(
            Command(DefaultCommands.SIMPLE_TEXT), message, author_id, id_factory
        )

    @classmethod
    def restore(
        cls,
        command: Command,
        payload: Payload | int,
        author_id: uuid.UUID | None,
        packet_id: uuid.UUID,
    ) -> Packet:
        """Rebuild a packet that already has an identity, e.g. after decode."""
        return cls(command, payload, author_id, packet_id)

    # ─── WIRE CODEC ───────────────────────────────────────────────────

    def to_wire_text(self, settings: WireSettings | None = None) -> str:
        """Encode this packet as wire text. Never fails."""
        settings = settings or DEFAULT_SETTINGS
        text = render_frame(
            command=self.command.tag_string(),
            data=format_payload(self.payload),
            packet_id=format_identifier(self.packet_id),
            author_id=format_identifier(self.author_id),
            escape_quotes=settings.escape_quotes,
        )
        logger.debug("Encoded %s", self)
        return text

    @classmethod
    def from_wire_text(cls, text: str, settings: WireSettings | None = None) -> Packet:
        """Decode wire text, keeping the sender's ``packet_id``.

        Raises:
            DecodeError: A field is missing or its value is unusable.
        """
        settings = settings or DEFAULT_SETTINGS
        try:
            frame = read_frame(
                text, mode=settings.decode_mode, escaped=settings.escape_quotes
            )
            author_id = parse_identifier(frame.author_id, FIELD_AUTHOR_ID)
            packet_id = parse_identifier(
                frame.packet_id, FIELD_PACKET_ID, nullable=False
            )
        except DecodeError as e:
            logger.warning("Could not decode packet (%s): %s", settings.decode_mode.value, e)
            raise

        packet = cls.restore(
            Command(frame.command), parse_payload(frame.data), author_id, packet_id
        )
        logger.debug("Decoded %s", packet)
        return packet

    # ─── ACCESSORS / DISPLAY ──────────────────────────────────────────

    @property
    def type(self) -> str:
        """Routing key of this packet's command."""
        return self.command.type

    def short_author_id(self) -> str:
        return shorten_id(self.author_id)

    def to_shortened_string(self) -> str:
        data_type = type(self.payload).__name__ if self.payload is not None else "null"
        return (
            f"Packet{{PacketID: {shorten_id(self.packet_id)}, "
            f"DataType: {data_type}, "
            f"AuthID: {self.short_author_id()}, "
            f"Type: {self.command.type_string()}}}"
        )

    def to_long_string(self) -> str:
        return (
            f"Packet{{PacketID: {self.packet_id}, "
            f"Command: {self.command.tag_string()}, "
            f"Data: {format_payload(self.payload)}, "
            f"AuthID: {format_identifier(self.author_id)}, "
            f"Type: {self.command.type_string()}}}"
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "command": self.command.tag,
            "type": self.type,
            "payload": self.payload,
            "payload_type": type(self.payload).__name__ if self.payload is not None else None,
            "author_id": str(self.author_id) if self.author_id is not None else None,
            "packet_id": str(self.packet_id),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Packet):
            return NotImplemented
        return self.packet_id == other.packet_id

    def __hash__(self) -> int:
        return hash(self.packet_id)

    def __str__(self) -> str:
        return self.to_shortened_string()

    def __repr__(self) -> str:
        return f"Packet(packet_id={str(self.packet_id)!r}, command={self.command.tag!r})"
