"""Feed payload adapter: validation and translation of stored feed settings."""

from __future__ import annotations

from .schema import FeedPayload, FieldMappingPayload, FieldPayload, FieldSettingsPayload
from .translator import (
    flatten_row,
    translate_feed_context,
    translate_field_config,
    translate_field_info,
)

__all__ = [
    "FeedPayload",
    "FieldMappingPayload",
    "FieldPayload",
    "FieldSettingsPayload",
    "flatten_row",
    "translate_feed_context",
    "translate_field_config",
    "translate_field_info",
]
