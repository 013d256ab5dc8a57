"""
Text Processing Utilities

Functions for name normalization and URL handling.
"""

from __future__ import annotations

import base64
import binascii
import re

from pydantic import AnyUrl, TypeAdapter, ValidationError
from slugify import slugify

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

_WHITESPACE = re.compile(r"\s+")


def leaf_slug(value: str | int, fallback: str = "challenge") -> str:
    """
    Normalize an id or alias into a filesystem-safe leaf name.

    Args:
        value: e.g., "Mock Challenge #12" or 12

    Returns:
        Slug e.g., "mock-challenge-12" (fallback when nothing survives)
    """
    return slugify(str(value)) or fallback


def branch_name(value: str, fallback: str) -> str:
    """Branch names keep their case; only path separators are replaced."""
    name = value.strip().replace("/", "-")
    return name or fallback


def decode_base64_url(value: str) -> str | None:
    """
    Decode a standard-base64 obfuscated URL.

    Whitespace (e.g. from folded YAML scalars) is ignored.

    Returns:
        The decoded text, or None if it is not valid base64 / UTF-8
    """
    compact = _WHITESPACE.sub("", value or "")
    if not compact:
        return None
    try:
        raw = base64.b64decode(compact, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None


def encode_base64_url(url: str) -> str:
    """Inverse of decode_base64_url()."""
    return base64.b64encode(url.encode("utf-8")).decode("ascii")


def is_absolute_url(value: str) -> bool:
    """True if value parses as a URL with both a scheme and a host."""
    if not value or value != value.strip():
        return False
    try:
        url = _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return bool(url.host)
