"""Protocol layer: command tags, wire text framing, and value parsing."""

from .commands import Command, DefaultCommands, build_command, build_tag
from .errors import DecodeError, FieldNotFoundError, FieldValueError
from .framing import DecodeMode, WireFrame, read_frame, render_frame
