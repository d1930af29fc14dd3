"""
Fleet back-office domain engine.

This package keeps four record collections consistent with each other:
- Vehicle: fleet inventory, with a status moved by rentals and maintenance
- Rental: a vehicle hired to a customer; completion frees the vehicle
- Maintenance: a service event; opening one takes the vehicle off the road
- Expenditure: a cost record, optionally attributed to a vehicle

Repositories own each collection's mutations; Fleet wires them to one
store. Dashboard statistics are recomputed from the records on demand.
"""

from .status import (
    VehicleStatus,
    RentalStatus,
    MaintenanceType,
    ExpenditureCategory,
    PaymentMethod,
)
from .vehicle import Vehicle
from .rental import Rental
from .maintenance import Maintenance
from .expenditure import Expenditure
from .dashboard_stats import DashboardStats
from .errors import (
    FleetError,
    NotFoundError,
    ConflictError,
    ValidationError,
    StorageError,
)
from .notifier import Notice, Notifier
from .calculations import rental_days, rental_total, suggest_next_service_date
from .store import Collection, MemoryStore, YamlStore
from .repositories import (
    VehicleRepository,
    RentalRepository,
    MaintenanceRepository,
    ExpenditureRepository,
)
from .statistics import compute_dashboard_stats
from .seed import ensure_seeded
from .context import Fleet

__all__ = [
    "VehicleStatus",
    "RentalStatus",
    "MaintenanceType",
    "ExpenditureCategory",
    "PaymentMethod",
    "Vehicle",
    "Rental",
    "Maintenance",
    "Expenditure",
    "DashboardStats",
    "FleetError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "StorageError",
    "Notice",
    "Notifier",
    "rental_days",
    "rental_total",
    "suggest_next_service_date",
    "Collection",
    "MemoryStore",
    "YamlStore",
    "VehicleRepository",
    "RentalRepository",
    "MaintenanceRepository",
    "ExpenditureRepository",
    "compute_dashboard_stats",
    "ensure_seeded",
    "Fleet",
]
