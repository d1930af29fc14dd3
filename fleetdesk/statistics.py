"""Fleet-wide aggregates, recomputed from the records on every call."""

from datetime import datetime, timedelta
from typing import List, Optional

from .calculations import month_window, now_iso
from .config import UPCOMING_MAINTENANCE_DAYS
from .dashboard_stats import DashboardStats
from .expenditure import Expenditure
from .maintenance import Maintenance
from .rental import Rental
from .status import RentalStatus, VehicleStatus
from .vehicle import Vehicle


def compute_dashboard_stats(
    vehicles: List[Vehicle],
    rentals: List[Rental],
    maintenance: List[Maintenance],
    expenditures: List[Expenditure],
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Aggregate the current state of the fleet.

    Logic:
    - Vehicle counts by status, rental counts for active and overdue
    - Revenue: total_amount of completed rentals whose actual end date is
      in the current calendar month
    - Expenses: amount of expenditures dated in the current calendar month
    - Upcoming maintenance: records whose next service date is at most
      UPCOMING_MAINTENANCE_DAYS away. Past dates count too, so an overdue
      service keeps showing until it is dealt with.

    All date comparisons are on ISO strings.
    """
    now = now or datetime.now().astimezone()
    month_start, month_end = month_window(now.date())
    horizon = now_iso(now + timedelta(days=UPCOMING_MAINTENANCE_DAYS))

    def in_month(value: Optional[str]) -> bool:
        return bool(value) and month_start <= value <= month_end

    def vehicles_with(status: VehicleStatus) -> int:
        return sum(1 for v in vehicles if v.status == status)

    return DashboardStats(
        total_vehicles=len(vehicles),
        available_vehicles=vehicles_with(VehicleStatus.AVAILABLE),
        rented_vehicles=vehicles_with(VehicleStatus.RENTED),
        maintenance_vehicles=vehicles_with(VehicleStatus.MAINTENANCE),
        unavailable_vehicles=vehicles_with(VehicleStatus.UNAVAILABLE),
        active_rentals=sum(1 for r in rentals if r.status == RentalStatus.ACTIVE),
        overdue_rentals=sum(1 for r in rentals if r.status == RentalStatus.OVERDUE),
        monthly_revenue=sum(
            r.total_amount or 0
            for r in rentals
            if r.status == RentalStatus.COMPLETED and in_month(r.actual_end_date)
        ),
        monthly_expenses=sum(e.amount or 0 for e in expenditures if in_month(e.date)),
        upcoming_maintenance=sum(
            1
            for m in maintenance
            if m.next_service_date and m.next_service_date <= horizon
        ),
    )
