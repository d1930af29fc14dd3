"""Vehicle record - a car in the fleet inventory."""

from dataclasses import dataclass
from typing import Optional

from .status import VehicleStatus


@dataclass
class Vehicle:
    """A fleet vehicle. Status is also moved by rental and maintenance events."""

    make: str
    model: str
    year: int
    license_plate: str
    fuel_type: str
    odometer: float = 0
    status: VehicleStatus = VehicleStatus.AVAILABLE
    last_maintenance: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    date_added: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def is_rentable(self) -> bool:
        return self.status == VehicleStatus.AVAILABLE
