"""Display formatting for amounts, dates and enum values."""

from datetime import datetime
from typing import Any, Optional

from .config import CURRENCY


def text(value: Any) -> Any:
    """Plain value of an enum member, anything else unchanged."""
    return getattr(value, "value", value)


def format_amount(amount: Optional[float]) -> str:
    """Format money with the fleet currency and two decimals."""
    return f"{CURRENCY}{amount:,.2f}" if amount is not None else "-"


def format_date(value: Optional[str]) -> str:
    """Format an ISO date or date-time as e.g. 'Jan 1, 2024'."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "Invalid date"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def truncate(value: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if value is None:
        return "-"
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."
