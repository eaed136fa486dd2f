"""Pure cadence arithmetic - no I/O dependencies."""

import calendar
from datetime import date, datetime, time

# Month offset for each recognized cadence, in display order
CADENCE_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "semi-annual": 6,
    "annual": 12,
}

CADENCES = tuple(CADENCE_MONTHS)

# Legacy labels still present in older records
CADENCE_ALIASES = {
    "yearly": "annual",
}


class UnrecognizedCadence(ValueError):
    """Raised when a cadence label is not one of CADENCES."""

    def __init__(self, cadence: str):
        self.cadence = cadence
        super().__init__(f"Unknown cadence: {cadence!r}")


def normalize_cadence(cadence: str) -> str:
    """Map legacy aliases to their canonical label. Does not validate."""
    return CADENCE_ALIASES.get(cadence, cadence)


def is_recognized_cadence(cadence: str) -> bool:
    return normalize_cadence(cadence) in CADENCE_MONTHS


def add_months(anchor: date, months: int) -> date:
    """
    Add calendar months to a date, clamping to the end of the target month.

    Jan 31 + 1 month is Feb 28 (or 29), never March.
    """
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


def next_touch_date(anchor: date | datetime, cadence: str) -> date:
    """
    Date the relationship is next due for contact.

    Pure function - no I/O. Time of day on the anchor is ignored.
    Raises UnrecognizedCadence rather than falling back to a default.
    """
    months = CADENCE_MONTHS.get(normalize_cadence(cadence))
    if months is None:
        raise UnrecognizedCadence(cadence)
    if isinstance(anchor, datetime):
        anchor = anchor.date()
    return add_months(anchor, months)


def as_instant(value: date | datetime) -> datetime:
    """Treat a bare date as local midnight."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def due_instant(due: date, now: datetime) -> datetime:
    """Midnight at the start of the due date, in the same tz as now."""
    return datetime.combine(due, time.min, tzinfo=now.tzinfo)


def is_overdue(anchor: date | datetime, cadence: str, now: date | datetime) -> bool:
    """Due date on or before now. Raises UnrecognizedCadence like next_touch_date."""
    now = as_instant(now)
    return due_instant(next_touch_date(anchor, cadence), now) <= now
