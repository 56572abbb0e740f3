"""Response decoding for the Daikin cloud API.

The cloud answers every request with a single line of comma separated
``key=value`` pairs::

    ret=OK,ctrl_info=pow%3D1%2Cmode%3D1%2Cairvol%3D0%2Chumd%3D4

Some values are themselves percent-encoded lists in the same grammar::

    list := pair (',' pair)*
    pair := key '=' value

Two decoding styles exist:

- FLAT: values are stored as they arrive. Used for command acknowledgements.
- NESTED: each value is percent-decoded and, when it parses into two or more
  sub-pairs, stored as a sub-map. Otherwise the original value is kept.

Decoding never raises. Segments without ``=`` map to an empty value, empty
segments are skipped and duplicate keys keep the last value seen.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from urllib.parse import unquote

PAIR_SEPARATOR = ","
KEY_VALUE_SEPARATOR = "="

RawKeyValueMap = dict[str, str | dict[str, str]]


class DecodeStyle(Enum):
    """How values of a response are decoded."""

    FLAT = "flat"
    NESTED = "nested"


def parse_pair(segment: str) -> tuple[str, str]:
    """Split a single ``key=value`` segment on its first ``=``.

    Example:
        >>> parse_pair("name=a=b")
        ('name', 'a=b')
        >>> parse_pair("stray")
        ('stray', '')
    """
    key, _, value = segment.partition(KEY_VALUE_SEPARATOR)
    return key, value


def parse_pairs(text: str) -> dict[str, str]:
    """Parse a comma separated list of pairs into an ordered dict.

    Args:
        text: Raw list, e.g. ``"pow=1,mode=3"``.

    Returns:
        Dict of key to raw string value. Later duplicates overwrite earlier ones.
    """
    result: dict[str, str] = {}
    for segment in text.split(PAIR_SEPARATOR):
        if not segment:
            continue
        key, value = parse_pair(segment)
        result[key] = value
    return result


def should_nest(sub_pairs: Mapping[str, str]) -> bool:
    """Decide whether a parsed value is an embedded record.

    A value is treated as a record when it parses into at least two
    sub-pairs. A single ``key=value`` is kept as a scalar.
    """
    return len(sub_pairs) >= 2


def decode_nested_value(value: str) -> str | dict[str, str]:
    """Decode one top-level value in NESTED style.

    Returns:
        Sub-map when the decoded value is a record, the original value otherwise.

    Example:
        >>> decode_nested_value("pow%3D1%2C")
        'pow%3D1%2C'
    """
    sub_pairs = parse_pairs(unquote(value))
    if should_nest(sub_pairs):
        return sub_pairs
    return value


def decode_response(body: str, style: DecodeStyle) -> RawKeyValueMap:
    """Decode a raw response body.

    Args:
        body: Response text as received from the cloud.
        style: DecodeStyle.FLAT or DecodeStyle.NESTED.

    Returns:
        Ordered mapping of key to string value or nested mapping.

    Example:
        >>> decode_response("ctrl_info=pow%3D1%2Cmode%3D1", DecodeStyle.NESTED)
        {'ctrl_info': {'pow': '1', 'mode': '1'}}
        >>> decode_response("ret=OK", DecodeStyle.NESTED)
        {'ret': 'OK'}
    """
    pairs = parse_pairs(body)

    if style is DecodeStyle.FLAT:
        return dict(pairs)

    if style is DecodeStyle.NESTED:
        return {key: decode_nested_value(value) for key, value in pairs.items()}

    raise ValueError(f"Unsupported decode style: {style!r}")
