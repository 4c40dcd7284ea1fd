"""
Publish-date window for batch searches.

Parses, validates and defaults an inclusive ``[after, before]`` range.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..config.constants import DATE_FORMAT, DEFAULT_WINDOW_DAYS
from ..exceptions import InvalidDateFormatError

DATE_BEFORE_FIELD = "date-before"
DATE_AFTER_FIELD = "date-after"


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar-date range.

    ``after`` may be later than ``before``; such a window is legal and simply
    matches nothing.
    """

    after: date
    before: date
    defaulted: bool = False

    def __str__(self) -> str:
        return f"{self.after.strftime(DATE_FORMAT)} - {self.before.strftime(DATE_FORMAT)}"


def is_valid_date(value: str, date_format: str = DATE_FORMAT) -> bool:
    """Check that ``value`` parses and renders back to exactly the same string.

    Rejects impossible dates (``2024-02-30``), missing zero padding
    (``2024-1-05``) and trailing text.
    """
    try:
        parsed = datetime.strptime(value, date_format)
    except ValueError:
        return False
    return parsed.strftime(date_format) == value


def parse_date(value: str, field: str) -> date:
    """Parse a strict YYYY-MM-DD string or raise InvalidDateFormatError naming the field."""
    if not is_valid_date(value):
        raise InvalidDateFormatError(field, value=value)
    return datetime.strptime(value, DATE_FORMAT).date()


def default_window(today: Optional[date] = None, days: int = DEFAULT_WINDOW_DAYS) -> DateWindow:
    """The last ``days`` days up to and including today."""
    before = today or date.today()
    return DateWindow(after=before - timedelta(days=days), before=before, defaulted=True)


def build_date_window(
    raw_after: Optional[str] = None,
    raw_before: Optional[str] = None,
    today: Optional[date] = None,
) -> DateWindow:
    """Build a DateWindow from caller-supplied strings.

    Both bounds must be supplied for either to be used; when one is missing
    the whole window falls back to the default and no validation happens.
    ``date-before`` is validated before ``date-after``.

    Raises:
        InvalidDateFormatError: If a supplied bound is not a real YYYY-MM-DD date
    """
    if not (raw_after and raw_before):
        return default_window(today)

    before = parse_date(raw_before, DATE_BEFORE_FIELD)
    after = parse_date(raw_after, DATE_AFTER_FIELD)
    return DateWindow(after=after, before=before)
