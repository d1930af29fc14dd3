"""Rental record - one vehicle bound to one customer for a period."""

from dataclasses import dataclass
from typing import Optional

from .calculations import rental_days
from .status import RentalStatus


@dataclass
class Rental:
    """
    A rental agreement.

    total_amount is a projection from expected_end_date until the rental is
    completed; after that it is computed from actual_end_date and frozen.
    """

    vehicle_id: str
    customer_name: str
    customer_phone: str
    start_date: str
    expected_end_date: str
    rental_rate: float
    deposit: float = 0
    status: RentalStatus = RentalStatus.ACTIVE
    customer_email: Optional[str] = None
    actual_end_date: Optional[str] = None
    total_amount: Optional[float] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    date_created: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def end_date(self) -> Optional[str]:
        """The date the amount is billed up to."""
        if self.status == RentalStatus.COMPLETED:
            return self.actual_end_date
        return self.expected_end_date

    @property
    def days(self) -> Optional[int]:
        """Billable days, inclusive of both ends."""
        return rental_days(self.start_date, self.end_date)
