"""
Utility functions for JSON Schema to Concerto conversion.

Identifier normalization, JSON pointer parsing and `$id` parsing shared by
the analyzer and the backends.
"""

from __future__ import annotations

import json
import re
import unicodedata
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

# Characters replaced by a plain underscore
_UNDERSCORE_PATTERN = re.compile(r"[\s\-<>]")

# Escaped code points such as \u00e9 are kept verbatim
_UNICODE_ESCAPE_PATTERN = re.compile(r"\\u[0-9A-Fa-f]{4}")

# Runs of percent-encoded bytes
_PERCENT_RUN_PATTERN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")

# Separators forbidden in declaration names
_NAME_SEPARATOR_PATTERN = re.compile(r"[/{}]")

_START_CATEGORIES = {"Lu", "Ll", "Lt", "Lm", "Lo", "Nl"}
_PART_CATEGORIES = _START_CATEGORIES | {"Mn", "Mc", "Nd", "Pc"}
_START_EXTRAS = {"$", "_"}
_PART_EXTRAS = _START_EXTRAS | {"\u200c", "\u200d"}

# Characters that decodeURI leaves escaped
_URI_RESERVED = set(";/?:@&=+$,#")

INLINE_NAME_SEPARATOR = "$_"


@dataclass
class IdUri:
    """Namespace and root type parsed from a schema `$id`."""

    namespace: str = ""
    type: str = ""


def is_truthy(value: Any) -> bool:
    """Truthiness of a JSON value, where empty arrays and objects count as set.

    Examples:
        0 -> False
        "" -> False
        [] -> True
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def to_json_string(value: Any) -> str:
    """Render a JSON scalar the way it reads in a document.

    Examples:
        True -> "true"
        3 -> "3"
        3.0 -> "3"
        "one" -> "one"
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


def _is_identifier_start(char: str) -> bool:
    return char in _START_EXTRAS or unicodedata.category(char) in _START_CATEGORIES


def _is_identifier_part(char: str) -> bool:
    return char in _PART_EXTRAS or unicodedata.category(char) in _PART_CATEGORIES


def normalize_identifier(value: str) -> str:
    """Turn an arbitrary string into a valid Concerto identifier.

    Whitespace, hyphens and angle brackets become underscores, any other
    invalid character becomes an underscore followed by its lowercase hex
    code point, and a leading underscore is added when the first character
    cannot start an identifier.

    Examples:
        "first name" -> "first_name"
        "Bar<Baz,Bing>" -> "Bar_Baz_2cBing_"
        "3" -> "_3"
        "" -> "_"

    Args:
        value: The string to normalize

    Returns:
        A valid identifier
    """
    replaced = _UNDERSCORE_PATTERN.sub("_", value)

    chars: list[str] = []
    index = 0
    while index < len(replaced):
        escape = _UNICODE_ESCAPE_PATTERN.match(replaced, index)
        if escape:
            chars.append(escape.group(0))
            index = escape.end()
            continue
        char = replaced[index]
        if _is_identifier_part(char):
            chars.append(char)
        else:
            chars.append(f"_{ord(char):x}")
        index += 1
    result = "".join(chars)

    if not result or not (_is_identifier_start(result[0]) or _UNICODE_ESCAPE_PATTERN.match(result)):
        result = f"_{result}"
    return result


def normalize_name(name: Any) -> str | None:
    """Normalize a declaration name, replacing path separators with "$_".

    Examples:
        "Root$_properties$_xs" -> "Root$_properties$_xs"
        "a/b" -> "a$_b"
        "{id}" -> "$_id$_"

    Args:
        name: The raw name

    Returns:
        The normalized name, or None when the name is not a string
    """
    if not isinstance(name, str):
        return None
    return normalize_identifier(_NAME_SEPARATOR_PATTERN.sub(INLINE_NAME_SEPARATOR, name))


def inline_object_name(path: tuple[str, ...] | list[str]) -> str:
    """Name of a declaration derived from its location in the document."""
    return INLINE_NAME_SEPARATOR.join(path)


def _decode_uri(value: str) -> str:
    """Percent-decode a URI component, keeping reserved escapes such as %2F."""

    def decode_run(match: re.Match) -> str:
        escapes = match.group(0)
        decoded: list[str] = []
        pending = bytearray()
        for start in range(0, len(escapes), 3):
            escape = escapes[start : start + 3]
            byte = int(escape[1:], 16)
            if byte < 0x80 and chr(byte) in _URI_RESERVED:
                if pending:
                    decoded.append(pending.decode("utf-8"))
                    pending.clear()
                decoded.append(escape)
            else:
                pending.append(byte)
        if pending:
            decoded.append(pending.decode("utf-8"))
        return "".join(decoded)

    return _PERCENT_RUN_PATTERN.sub(decode_run, value)


def parse_local_reference(reference: str) -> tuple[str, ...]:
    """Split a local `$ref` into its decoded path segments.

    Examples:
        "#" -> ()
        "#/definitions/Foo" -> ("definitions", "Foo")
        "#/definitions/Bar%3CBaz%2CBing%3E" -> ("definitions", "Bar<Baz,Bing>")

    Args:
        reference: A reference string starting with "#"

    Returns:
        Tuple of path segments
    """
    segments = [segment for segment in reference[1:].split("/") if segment]
    return tuple(re.sub("%2C", ",", _decode_uri(segment), flags=re.IGNORECASE) for segment in segments)


def parse_id_uri(schema_id: Any) -> IdUri | None:
    """Derive a namespace and a root type name from a schema `$id`.

    Examples:
        "https://example.com/schemas/product.schema.json"
            -> IdUri(namespace="com.example.schemas", type="product")

    Args:
        schema_id: The `$id` value

    Returns:
        The parsed namespace and type, or None when the `$id` is not a URL
    """
    if not isinstance(schema_id, str) or not schema_id:
        return None

    url = urlsplit(schema_id)
    if not url.hostname:
        return None

    namespace = ".".join(reversed(url.hostname.split(".")))
    path = url.path.split("/")
    last_segment = path.pop()
    last_segment = re.sub(r"\.json$", "", last_segment)
    last_segment = re.sub(r"\.schema$", "", last_segment)

    if path:
        namespace += ".".join(path)

    return IdUri(namespace=namespace, type=normalize_identifier(last_segment))


def get_value(obj: Any, path: tuple[str, ...] | list[str]) -> Any:
    """Look up a nested value, returning None when any segment is missing."""
    current = obj
    for segment in path:
        if not isinstance(current, dict) or segment not in current:
            return None
        current = current[segment]
    return current
