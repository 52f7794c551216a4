from __future__ import annotations

import datetime
import logging
import re
from typing import Callable, Optional

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

_UTC = datetime.timezone.utc

_MONTHS_RFC822: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Offsets in seconds east of UTC
_ZONE_NAMES: dict[str, int] = {
    "Z": 0,
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "WET": 0,
    "WEST": 3600,
    "BST": 3600,
    "CET": 3600,
    "CEST": 7200,
    "EET": 7200,
    "EEST": 10800,
    "MSK": 10800,
    "IST": 19800,
    "PST": -28800,
    "PDT": -25200,
    "MST": -25200,
    "MDT": -21600,
    "CST": -21600,
    "CDT": -18000,
    "EST": -18000,
    "EDT": -14400,
    "AKST": -32400,
    "AKDT": -28800,
    "HST": -36000,
    "AEST": 36000,
    "AEDT": 39600,
    "ACST": 34200,
    "ACDT": 37800,
    "AWST": 28800,
    "NZST": 43200,
    "NZDT": 46800,
    "JST": 32400,
    "KST": 32400,
    "SGT": 28800,
}

_WEEKDAY = r"(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s*"
_DAY_MONTH_YEAR = r"(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]{3})\s+(?P<year>\d{4})"
_HM = r"(?P<hour>\d{2}):(?P<minute>\d{2})"
_HMS = _HM + r":(?P<second>\d{2})"
_ZONE_NAME = r"(?P<zone>[A-Za-z]{1,5})"
_ZONE_OFFSET = r"(?P<zone>[+-]\d{4})"
_ISO_DATE = r"\d{4}-\d{2}-\d{2}"
_ISO_DATETIME = _ISO_DATE + r"T\d{2}:\d{2}:\d{2}"
_ISO_OFFSET = r"(?P<zone>Z|[+-]\d{2}:?\d{2})"


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE | re.ASCII)


def _zone_offset(zone: str) -> Optional[datetime.timezone]:
    if zone[0] in "+-":
        digits = zone[1:].replace(":", "")
        seconds = int(digits[:2]) * 3600 + int(digits[2:4]) * 60
        if seconds >= 86400:
            return None
        if zone[0] == "-":
            seconds = -seconds
        return datetime.timezone(datetime.timedelta(seconds=seconds))
    offset = _ZONE_NAMES.get(zone.upper())
    if offset is None:
        return None
    return datetime.timezone(datetime.timedelta(seconds=offset))


def _from_rfc822_match(m: re.Match[str]) -> Optional[datetime.datetime]:
    month = _MONTHS_RFC822.get(m.group("month").lower())
    tzinfo = _zone_offset(m.group("zone"))
    if month is None or tzinfo is None:
        return None
    second = m.groupdict().get("second")
    try:
        dt = datetime.datetime(
            int(m.group("year")),
            month,
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(second) if second else 0,
            tzinfo=tzinfo,
        ).astimezone(_UTC)
    except (ValueError, OverflowError):
        return None
    return dt


def _from_iso_match(m: re.Match[str]) -> Optional[datetime.datetime]:
    zone = m.groupdict().get("zone")
    if zone:
        tzinfo = _zone_offset(zone)
        if tzinfo is None:
            return None
    else:
        tzinfo = _UTC
    try:
        dt = isoparse(m.group("stamp"))
        return dt.replace(tzinfo=tzinfo).astimezone(_UTC)
    except (ValueError, OverflowError):
        # out of range once shifted to UTC
        return None


_Converter = Callable[["re.Match[str]"], Optional[datetime.datetime]]


def _rfc822(*parts: str) -> tuple[re.Pattern[str], _Converter]:
    return _compile(r"\s+".join(parts)), _from_rfc822_match


def _iso(pattern: str) -> tuple[re.Pattern[str], _Converter]:
    return _compile(pattern), _from_iso_match


# Tried in order; the first pattern that matches the whole string wins.
_PATTERNS: tuple[tuple[re.Pattern[str], _Converter], ...] = (
    _rfc822(_WEEKDAY + _DAY_MONTH_YEAR, _HMS, _ZONE_NAME),
    _rfc822(_WEEKDAY + _DAY_MONTH_YEAR, _HMS, _ZONE_OFFSET),
    _rfc822(_WEEKDAY + _DAY_MONTH_YEAR, _HM, _ZONE_NAME),
    _rfc822(_WEEKDAY + _DAY_MONTH_YEAR, _HM, _ZONE_OFFSET),
    _rfc822(_DAY_MONTH_YEAR, _HMS, _ZONE_NAME),
    _rfc822(_DAY_MONTH_YEAR, _HMS, _ZONE_OFFSET),
    _iso(r"(?P<stamp>" + _ISO_DATETIME + r")" + _ISO_OFFSET),
    _iso(r"(?P<stamp>" + _ISO_DATETIME + r"\.\d+)" + _ISO_OFFSET),
    _iso(r"(?P<stamp>" + _ISO_DATETIME + r")\s?" + _ZONE_NAME),
    _iso(r"(?P<stamp>" + _ISO_DATE + r")"),
)


def parse_date(date_str: Optional[str]) -> Optional[datetime.datetime]:
    """Parse a feed timestamp into a timezone-aware UTC datetime.

    Month and weekday names are always English and a missing zone means UTC,
    whatever the process locale. Returns ``None`` when no known pattern
    matches; that is never an error.
    """
    if not date_str:
        return None

    candidate = date_str.strip()
    if not candidate:
        return None

    for pattern, convert in _PATTERNS:
        m = pattern.fullmatch(candidate)
        if m is None:
            continue
        dt = convert(m)
        if dt is not None:
            return dt

    logger.debug("Unrecognized date format: %r", candidate)
    return None
