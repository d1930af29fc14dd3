"""Maintenance record for a service event."""

from dataclasses import dataclass
from typing import Optional

from .status import MaintenanceType


@dataclass
class Maintenance:
    """A service performed on a vehicle. Open until completed."""

    vehicle_id: str
    type: MaintenanceType
    description: str
    cost: float
    service_date: str
    service_provider: str
    next_service_date: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[str] = None
    date_created: Optional[str] = None
    last_updated: Optional[str] = None
