"""
Lifecycle events that move a vehicle's status.

Rental and maintenance repositories write their own record first, then
hand one of these events to the vehicle repository.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .status import VehicleStatus
from .vehicle import Vehicle


@dataclass(frozen=True)
class RentalCreated:
    vehicle_id: str


@dataclass(frozen=True)
class RentalCompleted:
    vehicle_id: str


@dataclass(frozen=True)
class MaintenanceOpened:
    vehicle_id: str
    service_date: str


@dataclass(frozen=True)
class MaintenanceUpdated:
    vehicle_id: str
    service_date: str


@dataclass(frozen=True)
class MaintenanceCompleted:
    vehicle_id: str
    completed_at: str


def vehicle_changes(vehicle: Vehicle, event) -> Dict[str, Any]:
    """
    Attribute changes an event implies for a vehicle.

    Returns an empty dict when the event leaves the vehicle alone:
    - RentalCreated: available -> rented
    - RentalCompleted: -> available
    - MaintenanceOpened: -> maintenance, unless already there
    - MaintenanceUpdated: refresh last_maintenance only
    - MaintenanceCompleted: maintenance -> available
    """
    if isinstance(event, RentalCreated):
        if vehicle.status == VehicleStatus.AVAILABLE:
            return {"status": VehicleStatus.RENTED}
    elif isinstance(event, RentalCompleted):
        return {"status": VehicleStatus.AVAILABLE}
    elif isinstance(event, MaintenanceOpened):
        if vehicle.status != VehicleStatus.MAINTENANCE:
            return {
                "status": VehicleStatus.MAINTENANCE,
                "last_maintenance": event.service_date,
            }
    elif isinstance(event, MaintenanceUpdated):
        return {"last_maintenance": event.service_date}
    elif isinstance(event, MaintenanceCompleted):
        if vehicle.status == VehicleStatus.MAINTENANCE:
            return {
                "status": VehicleStatus.AVAILABLE,
                "last_maintenance": event.completed_at,
            }
    else:
        raise TypeError(f"Unknown event: {event!r}")
    return {}
