"""MCP server entry point for inspecting online packets.

Exposes the packet codec as tools and the wire format as a resource via
the Model Context Protocol using the official Python MCP SDK with stdio
transport. Nothing here talks to peers; it only encodes, decodes and
explains packets.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from mcp.server.fastmcp import FastMCP

from .models.packet import Packet
from .models.settings import WireSettings
from .protocol.commands import Command, DefaultCommands, build_tag
from .protocol.errors import DecodeError
from .protocol.framing import FIELD_ORDER, WIRE_TEMPLATE, DecodeMode
from .utils.identifiers import new_id, shorten_id

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "online-packet",
    instructions="Encode, decode and inspect online packet wire text",
)


def _parse_uuid(value: str | None, name: str) -> uuid.UUID | None:
    """Parse an optional identifier argument."""
    if value is None or value == "" or value == "null":
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValueError(f"{name} is not a valid UUID: {value!r}") from None


def _settings(decode_mode: str, escape_quotes: bool) -> WireSettings:
    return WireSettings(decode_mode=decode_mode, escape_quotes=escape_quotes)


# ─── CODEC TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def encode_packet(
    command: str,
    payload: float | str | None = None,
    author_id: str | None = None,
    packet_id: str | None = None,
    escape_quotes: bool = False,
) -> dict[str, Any]:
    """Encode a packet to wire text.

    Args:
        command: Raw command tag, e.g. "chat;text;".
        payload: Number or text to carry.
        author_id: Author UUID, omitted or "null" for none.
        packet_id: Packet UUID to reuse; a fresh one is generated if omitted.
        escape_quotes: Backslash-escape quotes inside values.
    """
    try:
        author = _parse_uuid(author_id, "author_id")
        existing = _parse_uuid(packet_id, "packet_id")
        settings = _settings(DecodeMode.TOKENIZED.value, escape_quotes)
    except ValueError as e:
        return {"error": str(e)}

    try:
        if existing is None:
            packet = Packet.from_tag(command, payload, author)
        else:
            packet = Packet.restore(Command(command), payload, author, existing)
    except (TypeError, ValueError) as e:
        return {"error": str(e)}

    return {
        "wire_text": packet.to_wire_text(settings),
        "packet": packet.to_dict(),
        "summary": str(packet),
    }


@mcp.tool()
def encode_simple_text(message: str, author_id: str | None = None) -> dict[str, Any]:
    """Encode a plain text message packet (command SIMPLE_TEXT).

    Args:
        message: Text to send.
        author_id: Author UUID, omitted or "null" for none.
    """
    try:
        author = _parse_uuid(author_id, "author_id")
    except ValueError as e:
        return {"error": str(e)}

    packet = Packet.simple_text(message, author)
    return {
        "wire_text": packet.to_wire_text(),
        "packet": packet.to_dict(),
        "summary": str(packet),
    }


@mcp.tool()
def decode_packet(
    wire_text: str,
    decode_mode: str = DecodeMode.TOKENIZED.value,
    escape_quotes: bool = False,
) -> dict[str, Any]:
    """Decode wire text into its packet fields.

    Args:
        wire_text: Text as received from a peer.
        decode_mode: "tokenized" (default) or "legacy" name-seek scanning.
        escape_quotes: Values were written with escaped quotes.
    """
    try:
        settings = _settings(decode_mode, escape_quotes)
    except ValueError as e:
        return {"error": str(e)}

    try:
        packet = Packet.from_wire_text(wire_text, settings)
    except DecodeError as e:
        return {"error": str(e), "field": e.field}

    return {
        "packet": packet.to_dict(),
        "summary": packet.to_long_string(),
    }


# ─── COMMAND / IDENTIFIER TOOLS ──────────────────────────────────────

@mcp.tool()
def inspect_command(tag: str) -> dict[str, Any]:
    """Split a command tag into its segments.

    Args:
        tag: Raw command tag.
    """
    command = Command(tag)
    return {
        "tag": command.tag_string(),
        "type": command.type,
        "type_string": command.type_string(),
        "data_type": command.data_type,
        "segments": list(command.segments),
    }


@mcp.tool()
def build_command_tag(
    message_type: str, data_type: str = "", reserved: list[str] | None = None
) -> dict[str, Any]:
    """Build a command tag from its segments.

    Args:
        message_type: Routing key.
        data_type: Optional payload type hint.
        reserved: Further segments.
    """
    try:
        tag = build_tag(message_type, data_type, *(reserved or []))
    except ValueError as e:
        return {"error": str(e)}
    return {"tag": tag}


@mcp.tool()
def shorten_identifier(identifier: str | None = None) -> dict[str, str]:
    """Shorten an identifier for display (not unique).

    Args:
        identifier: UUID text, omitted or "null" for none.
    """
    try:
        value = _parse_uuid(identifier, "identifier")
    except ValueError as e:
        return {"error": str(e)}
    return {"short_id": shorten_id(value)}


@mcp.tool()
def new_packet_id() -> dict[str, str]:
    """Generate a fresh packet identifier."""
    value = new_id()
    return {"packet_id": str(value), "short_id": shorten_id(value)}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("packet://format")
def resource_format() -> str:
    """Wire text template, field order, and default commands."""
    return json.dumps({
        "template": WIRE_TEMPLATE.replace("{{", "{").replace("}}", "}"),
        "field_order": list(FIELD_ORDER),
        "decode_modes": [m.value for m in DecodeMode],
        "default_commands": {
            "simple_text": DefaultCommands.SIMPLE_TEXT,
        },
    }, indent=2)


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting online-packet MCP server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
