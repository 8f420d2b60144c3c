"""
Date-aware JSON encoding for persisted state.

datetime and date values are tagged so a save/load cycle restores them
as typed values instead of bare strings:

    {"__type": "datetime", "value": "2026-10-17T18:30:00"}
    {"__type": "date", "value": "2026-10-17"}

Plain ISO datetime strings from older dumps are revived as well.
"""

import json
import re
from datetime import date, datetime
from typing import Any

_TYPE_KEY = "__type"
_LEGACY_ISO = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


def encode_value(value: Any) -> Any:
    """Recursively replace datetime/date values with tagged dicts."""
    if isinstance(value, datetime):
        return {_TYPE_KEY: "datetime", "value": value.isoformat()}
    if isinstance(value, date):
        return {_TYPE_KEY: "date", "value": value.isoformat()}
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [encode_value(v) for v in value]
    return value


def decode_value(value: Any) -> Any:
    """Recursively restore tagged (and legacy ISO string) dates."""
    if isinstance(value, dict):
        tag = value.get(_TYPE_KEY)
        if tag in ("datetime", "Date") and isinstance(value.get("value"), str):
            return parse_datetime(value["value"])
        if tag == "date" and isinstance(value.get("value"), str):
            return date.fromisoformat(value["value"])
        return {k: decode_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [decode_value(v) for v in value]
    if isinstance(value, str) and _LEGACY_ISO.match(value):
        try:
            return parse_datetime(value)
        except ValueError:
            return value
    return value


def dumps(value: Any) -> str:
    """Serialize to a JSON string with tagged dates."""
    return json.dumps(encode_value(value), ensure_ascii=False)


def loads(text: str) -> Any:
    """Parse a JSON string and restore tagged dates."""
    return decode_value(json.loads(text))


def parse_datetime(text: str) -> datetime:
    """
    Parse an ISO timestamp into a naive datetime.

    Offsets (including the JS-style "Z" suffix of older dumps) are dropped
    so every stored date compares against the naive engine clock.
    """
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).replace(tzinfo=None)
