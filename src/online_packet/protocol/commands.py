"""Command tags and the well-known default commands.

A command tag is a semicolon-delimited string::

    {messageType};{dataType};{reserved...}

The first segment is the routing key a receiver dispatches on. Parsing is
lenient: any string is a valid tag, and a tag without a delimiter is
treated as a bare message type.
"""

from __future__ import annotations

from dataclasses import dataclass

COMMAND_DELIMITER = ";"
UNKNOWN_TYPE = "UNKNOWN"


class DefaultCommands:
    """Well-known command tags."""

    SIMPLE_TEXT = "SIMPLE_TEXT"


@dataclass(frozen=True)
class Command:
    """Immutable wrapper around a raw command tag."""

    tag: str = ""

    @property
    def type(self) -> str:
        """Message type: everything before the first delimiter.

        With no delimiter the whole tag is the type, so ``Command("noop")``
        routes as ``"noop"`` and ``Command("")`` as ``""``.
        """
        return self.tag.split(COMMAND_DELIMITER, 1)[0]

    @property
    def data_type(self) -> str:
        """Second segment, or ``""`` if the tag has none."""
        parts = self.tag.split(COMMAND_DELIMITER)
        return parts[1] if len(parts) > 1 else ""

    @property
    def segments(self) -> tuple[str, ...]:
        parts = self.tag.split(COMMAND_DELIMITER)
        # "a;b;" has a trailing empty segment from the closing delimiter
        if len(parts) > 1 and parts[-1] == "":
            parts = parts[:-1]
        return tuple(parts)

    def tag_string(self) -> str:
        return self.tag

    def type_string(self) -> str:
        return self.type or UNKNOWN_TYPE

    def __str__(self) -> str:
        return self.tag


def build_tag(message_type: str, data_type: str = "", *reserved: str) -> str:
    """Join segments into a command tag with a closing delimiter.

    Args:
        message_type: Routing key, must not contain the delimiter.
        data_type: Optional payload type hint.
        reserved: Any further segments.

    ``build_tag("chat", "text")`` gives ``"chat;text;"`` and
    ``build_tag("noop")`` gives ``"noop;"``.
    """
    segments = [message_type]
    if data_type or reserved:
        segments.append(data_type)
        segments.extend(reserved)
    for segment in segments:
        if COMMAND_DELIMITER in segment:
            raise ValueError(
                f"Command segment {segment!r} contains '{COMMAND_DELIMITER}'"
            )
    return COMMAND_DELIMITER.join(segments) + COMMAND_DELIMITER


def build_command(message_type: str, data_type: str = "", *reserved: str) -> Command:
    """Build a :class:`Command` from its segments."""
    return Command(build_tag(message_type, data_type, *reserved))
