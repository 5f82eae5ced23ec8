"""Conditional-request header helpers.

The version counter travels as a strong ETag, the decimal version in double
quotes (`"3"`). Clients echo it back in If-Match; the bare number (`3`) is
accepted too. Any integer, signed or not, is a version token and goes on to
the exact-equality check.
"""

from __future__ import annotations

import re


ETAG = "ETag"
IF_MATCH = "If-Match"
LOCATION = "Location"

_VERSION_TAG = re.compile(r'^(?:"([+-]?[0-9]+)"|([+-]?[0-9]+))$')


def render_etag(version: int) -> str:
    return f'"{version}"'


def parse_if_match(value: str) -> int | None:
    """Return the version carried by an If-Match value, or None if malformed.

    Weak tags (`W/"3"`), `*` and lists of tags are not version tokens and
    are rejected.
    """

    m = _VERSION_TAG.match(value.strip())
    if m is None:
        return None
    return int(m.group(1) or m.group(2))


def coffee_location(coffee_id: int | None) -> str:
    if coffee_id is None:
        raise ValueError("cannot build a Location for a coffee without an id")
    return f"/coffee/{coffee_id}"
