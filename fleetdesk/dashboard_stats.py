"""DashboardStats dataclass for fleet-wide aggregates."""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .loader import camel


@dataclass
class DashboardStats:
    """Counts and current-month money totals shown on the dashboard."""

    total_vehicles: int = 0
    available_vehicles: int = 0
    rented_vehicles: int = 0
    maintenance_vehicles: int = 0
    unavailable_vehicles: int = 0
    active_rentals: int = 0
    overdue_rentals: int = 0
    monthly_revenue: float = 0
    monthly_expenses: float = 0
    upcoming_maintenance: int = 0

    @property
    def monthly_profit(self) -> float:
        return self.monthly_revenue - self.monthly_expenses

    def to_dict(self) -> Dict[str, Any]:
        """camelCase keys, as the front end expects."""
        return {camel(k): v for k, v in asdict(self).items()}
