"""
JSON encoding of single values.

The compact form (no whitespace at all) is the one written to JSON Lines;
the indented form is for human inspection only.
"""

import math
from typing import Any

from jzonl.config import EncodeConfig
from jzonl.decoder import RawNumber

_ASCII_LIMIT = 127
_CONTROL_LIMIT = 0x20
_SURROGATE_MIN = 0xD800
_SURROGATE_MAX = 0xDFFF

_ESCAPE_MAP = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _encode_string(s: str, ensure_ascii: bool) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        code = ord(char)
        if char in _ESCAPE_MAP:
            result.append(_ESCAPE_MAP[char])
        elif code < _CONTROL_LIMIT or _SURROGATE_MIN <= code <= _SURROGATE_MAX:
            # Lone surrogates cannot be written as UTF-8
            result.append(f"\\u{code:04x}")
        elif ensure_ascii and code > _ASCII_LIMIT:
            if code > 0xFFFF:
                # Astral characters become a UTF-16 surrogate pair
                code -= 0x10000
                high = 0xD800 | (code >> 10)
                low = 0xDC00 | (code & 0x3FF)
                result.append(f"\\u{high:04x}\\u{low:04x}")
            else:
                result.append(f"\\u{code:04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: int | float) -> str:
    """Encode numeric values with JSON compliance."""
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            msg = "Out of range float values are not JSON compliant"
            raise ValueError(msg)
        return float.__repr__(n)
    return int.__repr__(n)


def _encode_key(key: Any, config: EncodeConfig) -> str | None:
    """Encode an object key, or return None when it should be skipped."""
    if isinstance(key, str):
        return _encode_string(key, config.ensure_ascii)
    if isinstance(key, bool):
        return '"true"' if key else '"false"'
    if isinstance(key, int | float):
        return f'"{_encode_number(key)}"'
    if config.skipkeys:
        return None
    msg = f"keys must be strings, not {type(key).__name__}"
    raise TypeError(msg)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


def _wrap(
    opening: str,
    items: list[str],
    closing: str,
    config: EncodeConfig,
    level: int,
) -> str:
    """Join encoded members, compactly or one per indented line."""
    if not items:
        return opening + closing
    if config.indent is None:
        return opening + ",".join(items) + closing

    inner_indent = _get_indent_string(config.indent, level + 1)
    outer_indent = _get_indent_string(config.indent, level)
    body = ",\n".join(f"{inner_indent}{item}" for item in items)
    return f"{opening}\n{body}\n{outer_indent}{closing}"


def _encode_array(
    arr: list[Any] | tuple[Any, ...], config: EncodeConfig, level: int
) -> str:
    """Encode array with optional formatting."""
    items = [_encode_value(item, config, level + 1) for item in arr]
    return _wrap("[", items, "]", config, level)


def _encode_dict(d: dict[Any, Any], config: EncodeConfig, level: int) -> str:
    """Encode dictionary with key filtering and formatting."""
    entries = list(d.items())
    if config.sort_keys:
        entries.sort(key=lambda item: str(item[0]))

    key_separator = ":" if config.indent is None else ": "
    items = []
    for key, value in entries:
        encoded_key = _encode_key(key, config)
        if encoded_key is None:
            continue
        encoded_value = _encode_value(value, config, level + 1)
        items.append(f"{encoded_key}{key_separator}{encoded_value}")

    return _wrap("{", items, "}", config, level)


def _encode_value(  # noqa: PLR0911
    obj: Any, config: EncodeConfig, level: int = 0
) -> str:
    """Encode any JSON-serializable value."""
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, RawNumber):
        return str.__str__(obj)
    elif isinstance(obj, str):
        return _encode_string(obj, config.ensure_ascii)
    elif isinstance(obj, int | float):
        return _encode_number(obj)
    elif isinstance(obj, dict):
        return _encode_dict(obj, config, level)
    elif isinstance(obj, list | tuple):
        return _encode_array(obj, config, level)
    elif config.default is not None:
        return _encode_value(config.default(obj), config, level)
    else:
        msg = f"Object of type {type(obj).__name__} is not JSON serializable"
        raise TypeError(msg)


def encode_value(obj: Any, config: EncodeConfig | None = None) -> str:
    """
    Serializes one value to JSON text.

    With the default config the result never contains a newline, which is
    what makes it safe to write as a JSON Lines record.
    """
    return _encode_value(obj, config or EncodeConfig())
