"""Fleet: the four repositories wired to one store and notifier."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .dashboard_stats import DashboardStats
from .notifier import Notifier
from .repositories import (
    ExpenditureRepository,
    MaintenanceRepository,
    RentalRepository,
    VehicleRepository,
)
from .seed import ensure_seeded
from .statistics import compute_dashboard_stats
from .store import YamlStore


class Fleet:
    """
    Entry point for front ends.

    The store is injected, so tests can pass a MemoryStore and the CLI or
    web app a YamlStore, with no other changes.
    """

    def __init__(self, store, notifier: Optional[Notifier] = None):
        self.store = store
        self.notifier = notifier or Notifier()
        self.vehicles = VehicleRepository(store, self.notifier)
        self.rentals = RentalRepository(store, self.vehicles, self.notifier)
        self.maintenance = MaintenanceRepository(store, self.vehicles, self.notifier)
        self.expenditures = ExpenditureRepository(store, self.notifier)
        self.vehicles.dependents = [self.rentals, self.maintenance]

    @classmethod
    def open(cls, data_dir: Union[str, Path], notifier: Optional[Notifier] = None) -> "Fleet":
        """Fleet backed by YAML files in data_dir."""
        return cls(YamlStore(data_dir), notifier)

    def ensure_seeded(self, now: Optional[datetime] = None) -> bool:
        return ensure_seeded(self.store, self.notifier, now)

    def compute_dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        return compute_dashboard_stats(
            self.vehicles.list(),
            self.rentals.list(),
            self.maintenance.list(),
            self.expenditures.list(),
            now,
        )
