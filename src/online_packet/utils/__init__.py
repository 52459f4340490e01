"""Utility helpers."""

from .identifiers import new_id, reset_id_factory, set_id_factory, shorten_id
