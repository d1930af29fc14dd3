"""Expenditure record. Attributed to one vehicle or to the whole fleet."""

from dataclasses import dataclass
from typing import Optional

from .status import ExpenditureCategory, PaymentMethod


@dataclass
class Expenditure:
    category: ExpenditureCategory
    amount: float
    date: str
    description: str
    payment_method: PaymentMethod
    vehicle_id: Optional[str] = None
    receipt: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    date_created: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def is_fleet_wide(self) -> bool:
        return not self.vehicle_id
