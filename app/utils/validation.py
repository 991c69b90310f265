"""Input normalisation shared by the API handlers."""

import re
from enum import Enum
from typing import TypeVar

from app.exceptions import InvalidInputException, allowed_values_message

EnumT = TypeVar("EnumT", bound=Enum)

# local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

URL_PREFIXES = ("http://", "https://", "/")


def clamp_pagination(
    limit: int | None,
    offset: int | None,
    default_limit: int = 100,
    max_limit: int = 500,
) -> tuple[int, int]:
    """Bring requested page bounds into range.

    Missing values fall back to the defaults, ``limit`` is kept within
    ``1..max_limit`` and ``offset`` is never negative.
    """
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, max_limit))

    if offset is None or offset < 0:
        offset = 0

    return limit, offset


def has_more(total: int, limit: int, offset: int) -> bool:
    """Whether rows remain past the current page."""
    return total > offset + limit


def is_valid_email(value: str) -> bool:
    """Basic ``local@domain.tld`` shape check."""
    return bool(EMAIL_PATTERN.match(value))


def is_icon_url(value: str) -> bool:
    """Tell an icon URL (absolute or site-relative) from an icon library name."""
    return value.startswith(URL_PREFIXES)


def parse_choice(field: str, value: str | None, choices: type[EnumT]) -> EnumT:
    """Convert a raw value to a member of ``choices`` or fail with InvalidInput."""
    try:
        return choices(value)
    except ValueError:
        raise InvalidInputException(allowed_values_message(field, choices))
