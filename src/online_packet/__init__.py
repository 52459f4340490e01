"""Packet envelope, command tags, and wire text codec for peer messaging."""

from .models import DEFAULT_SETTINGS, LEGACY_SETTINGS, Packet, WireSettings
from .protocol import (
    Command,
    DecodeError,
    DecodeMode,
    DefaultCommands,
    FieldNotFoundError,
    FieldValueError,
    build_command,
    build_tag,
)
from .utils import shorten_id

__version__ = "0.1.0"
