"""
Value Coercion and Wire Encodings

Helpers used when turning a profile into a concrete request: scalar coercion
of override values, nested query-string encoding, flat form encoding and
content-type extraction.
"""

import json
import math
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlencode

from ..core.exceptions import ValidationError

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data"}
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a JSON value")


def parse_scalar(value: str) -> Any:
    """
    Interpret ``value`` as a JSON scalar, falling back to the raw string.

    Numbers, ``true``, ``false`` and ``null`` are converted; anything else
    (including JSON arrays, objects and quoted strings) is returned unchanged.
    """
    try:
        parsed = json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return value

    if isinstance(parsed, float) and not math.isfinite(parsed):
        return value
    if parsed is None or isinstance(parsed, (bool, int, float)):
        return parsed
    return value


def format_scalar(value: Any) -> str:
    """Render a JSON scalar the way it appears in query and form strings."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return str(value)


def is_empty_object(value: Any) -> bool:
    """True when an optional object is absent or has no keys."""
    return value is None or (isinstance(value, dict) and not value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]" if prefix else str(key), item, pairs)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, format_scalar(value)))


def encode_query(params: dict) -> str:
    """
    Encode an object as a query string, expanding nested objects and arrays
    into bracketed keys (``a[b]=1``, ``l[0]=x``).
    """
    pairs: List[Tuple[str, str]] = []
    _flatten("", params, pairs)
    return "&".join(
        f"{quote(key, safe='[]')}={quote(value, safe='')}" for key, value in pairs
    )


def encode_form(body: dict) -> str:
    """
    Encode a flat object as ``application/x-www-form-urlencoded`` text.

    Raises:
        ValidationError: If a value is a nested object or array
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in body.items():
        if isinstance(value, (dict, list)):
            raise ValidationError(
                f"Cannot form-encode nested value for body key {key!r}",
                {"key": key},
            )
        if value is None:
            continue
        pairs.append((str(key), format_scalar(value)))
    return urlencode(pairs)


def encode_json(body: Any) -> str:
    """Compact JSON text."""
    try:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise ValidationError(f"Body cannot be encoded as JSON: {e}", {"body": body}) from e


def media_type(value: Optional[str]) -> Optional[str]:
    """Strip parameters such as ``; charset=utf-8`` from a content type."""
    if value is None:
        return None
    return value.split(";", 1)[0].strip().lower()


def get_content_type(headers: Iterable[Tuple[str, str]]) -> Optional[str]:
    """
    Find the Content-Type among ``(name, value)`` pairs and return its media type.

    Header names are matched case-insensitively.
    """
    for name, value in headers:
        if name.lower() == "content-type":
            return media_type(value)
    return None
