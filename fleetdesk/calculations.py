"""Helper functions for rental amounts, service dates and timestamps."""

import calendar
import uuid
from datetime import date, datetime, timezone
from typing import Optional, Tuple

from dateutil.relativedelta import relativedelta

from .config import NEXT_SERVICE_MONTHS


def to_date(value: str) -> date:
    """Parse the date part of an ISO date or date-time string."""
    return date.fromisoformat(value[:10])


def rental_days(start: Optional[str], end: Optional[str]) -> Optional[int]:
    """
    Count billable days between two ISO dates, inclusive of both ends.

    2024-01-01 to 2024-01-03 is three days. The time part of date-time
    strings is ignored. Returns None when either date is missing.
    """
    if not start or not end:
        return None
    return (to_date(end) - to_date(start)).days + 1


def rental_total(
    start: Optional[str], end: Optional[str], rate: Optional[float]
) -> Optional[float]:
    """Calculate the rental amount: inclusive day count x daily rate."""
    days = rental_days(start, end)
    if days is None or days < 1 or rate is None:
        return None
    return days * rate


def suggest_next_service_date(maintenance_type: str, service_date: str) -> str:
    """
    Suggest when a vehicle should next be serviced.

    routine: +3 months, repair: +6 months, inspection: +12 months.
    Unknown types fall back to the routine interval.
    """
    months = NEXT_SERVICE_MONTHS.get(
        getattr(maintenance_type, "value", maintenance_type),
        NEXT_SERVICE_MONTHS["routine"],
    )
    return (to_date(service_date) + relativedelta(months=months)).isoformat()


def month_window(today: date) -> Tuple[str, str]:
    """
    First and last instant of the calendar month containing today.

    Both bounds are inclusive and compare correctly as strings against
    plain dates ("2024-05-31") and date-times ("2024-05-31T18:00:00.000Z").
    """
    last_day = calendar.monthrange(today.year, today.month)[1]
    start = today.replace(day=1).isoformat()
    end = today.replace(day=last_day).isoformat() + "T23:59:59.999Z"
    return start, end


def now_iso(now: Optional[datetime] = None) -> str:
    """UTC timestamp in the stored format, e.g. 2024-05-01T09:30:00.000Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_id(prefix: str) -> str:
    """Generate a record id such as v-3f2b...; unique across rapid calls."""
    return f"{prefix}-{uuid.uuid4().hex}"
