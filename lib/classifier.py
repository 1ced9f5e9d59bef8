# =============================================================================
# lib/classifier.py - Value Classification
# =============================================================================
# Decides which semantic types a single raw CSV value matches.
#
# Every type has its own pure recognizer (is_integer, is_date, ...). A value
# is tested against all of them independently, so one value can match several
# types: "42" is an Integer, a Float and (being neither 0 nor 1) not a Boolean;
# "1" is all three.
#
# The recognizers accept a fixed set of formats only. No locale handling.
# =============================================================================

import ipaddress
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any

from core.models.analysis import TYPE_PRIORITY, SemanticType


# =============================================================================
# Constants
# =============================================================================

# Compared case-insensitively.
BOOLEAN_VALUES = frozenset({"true", "false", "1", "0", "yes", "no"})

URL_SCHEMES = ("http", "https", "ftp")

PATTERNS = {
    "integer": re.compile(r"^[+-]?\d+$"),
    "float": re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$"),
    "date_iso": re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"),
    "date_slash": re.compile(r"^(\d{2})/(\d{2})/(\d{4})$"),
    "time": re.compile(r"^(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?$"),
    "datetime": re.compile(
        r"^(\d{4}-\d{2}-\d{2})[T ]"
        r"(\d{2}:\d{2}(?::\d{2}(?:\.\d{1,9})?)?)"
        r"(Z|[+-]\d{2}:?\d{2})?$"
    ),
    "email": re.compile(r"^[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+$"),
    "url": re.compile(r"^([A-Za-z]+)://([^\s/?#]+)(?:[/?#]\S*)?$"),
}


# =============================================================================
# Parsers
# =============================================================================
# Each returns the parsed value, or None when the text is not in a supported
# format. Recognizers and order keys are both built on these.

def _parse_iso_date(value: str) -> date | None:
    match = PATTERNS["date_iso"].match(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_slash_date(value: str) -> date | None:
    """Read DD/MM/YYYY, or MM/DD/YYYY when the day-first reading is invalid."""
    match = PATTERNS["date_slash"].match(value)
    if not match:
        return None
    first, second, year = (int(part) for part in match.groups())
    for day, month in ((first, second), (second, first)):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return None


def parse_date(value: str) -> date | None:
    """Parse a date in one of the supported formats."""
    return _parse_iso_date(value) or _parse_slash_date(value)


def parse_time(value: str) -> time | None:
    """Parse HH:MM[:SS[.fraction]] with two-digit fields."""
    match = PATTERNS["time"].match(value)
    if not match:
        return None
    hour, minute, second, fraction = match.groups()
    microsecond = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    try:
        return time(int(hour), int(minute), int(second or 0), microsecond)
    except ValueError:
        return None


def _parse_offset(text: str) -> timezone | None:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 23 or minutes > 59:
        return None
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_datetime(value: str) -> datetime | None:
    """
    Parse an ISO date and time joined by 'T' or a space.

    Values with an offset are converted to UTC and returned naive so that
    they compare with values that have none.
    """
    match = PATTERNS["datetime"].match(value)
    if not match:
        return None
    date_part, time_part, offset = match.groups()
    parsed_date = _parse_iso_date(date_part)
    parsed_time = parse_time(time_part)
    if parsed_date is None or parsed_time is None:
        return None
    result = datetime.combine(parsed_date, parsed_time)
    if offset:
        tz = _parse_offset(offset)
        if tz is None:
            return None
        try:
            result = result.replace(tzinfo=tz).astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # UTC falls outside years 1..9999; keep the wall-clock value.
            pass
    return result


# =============================================================================
# Recognizers
# =============================================================================

def is_integer(value: str) -> bool:
    """Optional sign followed by digits only."""
    return PATTERNS["integer"].match(value) is not None


def is_float(value: str) -> bool:
    """Decimal number with an optional fraction and exponent."""
    return PATTERNS["float"].match(value) is not None


def is_boolean(value: str) -> bool:
    return value.lower() in BOOLEAN_VALUES


def is_date(value: str) -> bool:
    return parse_date(value) is not None


def is_datetime(value: str) -> bool:
    return parse_datetime(value) is not None


def is_time(value: str) -> bool:
    return parse_time(value) is not None


def is_email(value: str) -> bool:
    """local-part@domain with a dotted domain and no whitespace."""
    return PATTERNS["email"].match(value) is not None


def is_url(value: str) -> bool:
    """http, https or ftp URL with a non-empty authority."""
    match = PATTERNS["url"].match(value)
    return match is not None and match.group(1).lower() in URL_SCHEMES


def is_ip(value: str) -> bool:
    """IPv4 dotted quad or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


RECOGNIZERS: dict[SemanticType, Callable[[str], bool]] = {
    SemanticType.INTEGER: is_integer,
    SemanticType.FLOAT: is_float,
    SemanticType.BOOLEAN: is_boolean,
    SemanticType.DATE: is_date,
    SemanticType.DATETIME: is_datetime,
    SemanticType.TIME: is_time,
    SemanticType.EMAIL: is_email,
    SemanticType.URL: is_url,
    SemanticType.IP: is_ip,
}

# Types whose values have a natural order other than lexicographic.
ORDER_KEYS: dict[SemanticType, Callable[[str], Any]] = {
    SemanticType.INTEGER: Decimal,
    SemanticType.FLOAT: Decimal,
    SemanticType.DATE: parse_date,
    SemanticType.DATETIME: parse_datetime,
    SemanticType.TIME: parse_time,
}


# =============================================================================
# Classification
# =============================================================================

@dataclass(frozen=True)
class TypeMatch:
    """Outcome of testing one value against one type."""
    type: SemanticType
    matched: bool


def matched_types(value: str) -> frozenset[SemanticType]:
    """
    Return every non-String type the value matches.

    The value must be non-empty; STRING is implied for all values and is
    not included.
    """
    return frozenset(
        semantic_type
        for semantic_type in TYPE_PRIORITY
        if RECOGNIZERS[semantic_type](value)
    )


def classify_value(value: str) -> list[TypeMatch]:
    """
    Test a non-empty raw value against all ten non-Null types.

    Returns:
        One TypeMatch per type, in priority order, STRING last
    """
    matches = matched_types(value)
    results = [TypeMatch(t, t in matches) for t in TYPE_PRIORITY]
    results.append(TypeMatch(SemanticType.STRING, True))
    return results
