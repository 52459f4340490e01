"""Data models for packets and codec settings."""

from .packet import Packet
from .settings import DEFAULT_SETTINGS, LEGACY_SETTINGS, WireSettings
