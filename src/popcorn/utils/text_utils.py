"""Text processing utilities for OMDb payloads."""

import re
from datetime import date, datetime
from typing import Iterable, Optional

NOT_AVAILABLE = "N/A"


def clean_na(value: Optional[str]) -> Optional[str]:
    """Map OMDb's "N/A" placeholder and blank strings to None.

    Args:
        value: Raw field value.

    Returns:
        Stripped value or None.
    """
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == NOT_AVAILABLE:
        return None
    return value


def parse_runtime(runtime: Optional[str]) -> Optional[int]:
    """Parse a runtime such as "136 min" into minutes.

    Args:
        runtime: Raw runtime text.

    Returns:
        Runtime in minutes or None if not parseable.
    """
    runtime = clean_na(runtime)
    if runtime is None:
        return None

    match = re.match(r"^(\d+)", runtime)
    if not match:
        return None
    return int(match.group(1))


def parse_rating(rating: Optional[str]) -> Optional[float]:
    """Parse an IMDb rating string in the 0-10 range.

    Args:
        rating: Raw rating text, e.g. "7.5".

    Returns:
        Rating as float or None if missing or out of range.
    """
    rating = clean_na(rating)
    if rating is None:
        return None

    try:
        value = float(rating)
    except ValueError:
        return None

    if not 0.0 <= value <= 10.0:
        return None
    return value


def parse_release_date(released: Optional[str]) -> Optional[date]:
    """Parse OMDb's "Released" field, e.g. "23 Jun 1989".

    Args:
        released: Raw release date text.

    Returns:
        Parsed date or None.
    """
    released = clean_na(released)
    if released is None:
        return None

    try:
        return datetime.strptime(released, "%d %b %Y").date()
    except ValueError:
        return None


def average(values: Iterable[Optional[float]]) -> float:
    """Average of the present values, 0.0 when there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return sum(present) / len(present)
