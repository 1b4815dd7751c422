"""Timestamp parsing and merge-window checks."""

import logging
from datetime import datetime, timezone
from typing import Optional


DATE_ONLY_FORMAT = '%Y-%m-%d'


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC3339 timestamp or a YYYY-MM-DD date into an aware datetime.

    Date-only values mean midnight UTC; naive timestamps are taken as UTC.

    Raises:
        ValueError: If the value matches neither format
    """
    value = value.strip()
    try:
        parsed = datetime.strptime(value, DATE_ONLY_FORMAT)
    except ValueError:
        # fromisoformat() only accepts the 'Z' suffix from Python 3.11 on
        if value.endswith(('Z', 'z')):
            value = value[:-1] + '+00:00'
        parsed = datetime.fromisoformat(_trim_fraction(value))

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _trim_fraction(value: str) -> str:
    """Cut fractional seconds to microseconds so fromisoformat() accepts them."""
    if '.' not in value:
        return value
    head, _, rest = value.partition('.')
    digits = len(rest) - len(rest.lstrip('0123456789'))
    fraction, tail = rest[:digits], rest[digits:]
    return f"{head}.{fraction[:6].ljust(6, '0')}{tail}"


def parse_time_filter(value: Optional[str], name: str = 'time') -> Optional[datetime]:
    """Parse a --since/--until value; unparseable values disable the filter."""
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        logging.warning(f"Cannot parse {name} {value!r}, ignoring filter")
        return None


def in_range(moment: Optional[datetime], since: Optional[datetime], until: Optional[datetime]) -> bool:
    """Check whether a merge time lies in [since, until], inclusive on both ends."""
    if moment is None:
        # an unknown merge time is earlier than any lower bound
        return since is None
    if since is not None and moment < since:
        return False
    if until is not None and moment > until:
        return False
    return True
