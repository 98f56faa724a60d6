"""Month identifier parsing and calendar helpers."""
import calendar
import re
from datetime import date

MONTH_ID_RE = re.compile(r"^(\d{4})-(\d{2})$")


class InvalidMonthIdError(ValueError):
    """Raised when a month identifier is not of the form YYYY-MM."""


def parse_month_id(month_id: str) -> tuple[int, int]:
    """Split a "YYYY-MM" identifier into (year, month).

    Raises InvalidMonthIdError for anything else, including months outside 1-12.
    """
    if not isinstance(month_id, str):
        raise InvalidMonthIdError(f"Month id must be a string, got {type(month_id).__name__}")
    match = MONTH_ID_RE.match(month_id.strip())
    if not match:
        raise InvalidMonthIdError(f"Malformed month id: {month_id!r} (expected YYYY-MM)")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidMonthIdError(f"Month id out of range: {month_id!r}")
    return year, month


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_id_for(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_name(month_id: str) -> str:
    """Human label, e.g. "2023-10" -> "October 2023"."""
    year, month = parse_month_id(month_id)
    return f"{calendar.month_name[month]} {year}"


def next_month_id(month_id: str) -> str:
    year, month = parse_month_id(month_id)
    if month == 12:
        return f"{year + 1:04d}-01"
    return f"{year:04d}-{month + 1:02d}"
