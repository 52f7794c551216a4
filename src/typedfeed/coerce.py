"""Nil-preserving conversions from raw element text to typed field values.

Every helper accepts ``None`` and returns ``None`` for anything it cannot
convert, so a bad optional field never aborts a parse.
"""

from __future__ import annotations

import datetime
import re
from typing import Optional
from urllib.parse import urlsplit

from .dates import parse_date

_RE_INTEGER = re.compile(r"[+-]?[0-9]+")
_RE_URL_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_RE_URL_FORBIDDEN = re.compile(r"[\s\x00-\x1f\x7f<>\"]")


def coerce_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def coerce_url(value: Optional[str]) -> Optional[str]:
    """Return the trimmed value if it is an absolute URL with any scheme."""
    candidate = coerce_text(value)
    if candidate is None or _RE_URL_FORBIDDEN.search(candidate):
        return None
    try:
        parts = urlsplit(candidate)
    except ValueError:
        # e.g. an unterminated IPv6 host
        return None
    if not parts.scheme or not _RE_URL_SCHEME.fullmatch(parts.scheme):
        return None
    if not (parts.netloc or parts.path):
        return None
    return candidate


def coerce_int(value: Optional[str]) -> Optional[int]:
    candidate = coerce_text(value)
    if candidate is None or not _RE_INTEGER.fullmatch(candidate):
        return None
    try:
        return int(candidate)
    except ValueError:
        # exceeds the interpreter's integer string conversion limit
        return None


def coerce_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() == "true"


def coerce_date(value: Optional[str]) -> Optional[datetime.datetime]:
    candidate = coerce_text(value)
    if candidate is None:
        return None
    return parse_date(candidate)
