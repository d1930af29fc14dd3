#!/usr/bin/env python3
"""Tests for dashboard statistics."""

from datetime import datetime, timezone

import pytest

from fleetdesk import (
    Maintenance,
    MaintenanceType,
    RentalStatus,
    VehicleStatus,
    compute_dashboard_stats,
)

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(new_maintenance):
    def build(next_service_date):
        return new_maintenance("v-1", next_service_date=next_service_date)

    return build


class TestComputeDashboardStats:
    """Tests for compute_dashboard_stats."""

    def test_empty_fleet(self):
        stats = compute_dashboard_stats([], [], [], [], now=NOW)
        assert stats.total_vehicles == 0
        assert stats.monthly_revenue == 0
        assert stats.monthly_expenses == 0
        assert stats.upcoming_maintenance == 0

    def test_vehicle_counts_by_status(self, new_vehicle):
        vehicles = [
            new_vehicle(),
            new_vehicle(),
            new_vehicle(status=VehicleStatus.RENTED),
            new_vehicle(status=VehicleStatus.MAINTENANCE),
            new_vehicle(status=VehicleStatus.UNAVAILABLE),
        ]
        stats = compute_dashboard_stats(vehicles, [], [], [], now=NOW)
        assert stats.total_vehicles == 5
        assert stats.available_vehicles == 2
        assert stats.rented_vehicles == 1
        assert stats.maintenance_vehicles == 1
        assert stats.unavailable_vehicles == 1

    def test_rental_counts(self, new_rental):
        rentals = [
            new_rental("v-1"),
            new_rental("v-2", status=RentalStatus.OVERDUE),
            new_rental("v-3", status=RentalStatus.CANCELLED),
        ]
        stats = compute_dashboard_stats([], rentals, [], [], now=NOW)
        assert stats.active_rentals == 1
        assert stats.overdue_rentals == 1

    def test_monthly_revenue_and_expenses(self, new_rental, new_expenditure):
        rentals = [
            new_rental(
                "v-1",
                status=RentalStatus.COMPLETED,
                actual_end_date="2024-05-03",
                total_amount=450,
            )
        ]
        expenditures = [new_expenditure(amount=200, date="2024-05-10")]
        stats = compute_dashboard_stats([], rentals, [], expenditures, now=NOW)
        assert stats.monthly_revenue == 450
        assert stats.monthly_expenses == 200
        assert stats.monthly_profit == 250

    def test_revenue_only_from_completed_rentals_this_month(self, new_rental):
        rentals = [
            new_rental("v-1", total_amount=900),
            new_rental(
                "v-2",
                status=RentalStatus.COMPLETED,
                actual_end_date="2024-04-30",
                total_amount=300,
            ),
            new_rental(
                "v-3",
                status=RentalStatus.COMPLETED,
                actual_end_date="2024-05-31T18:00:00.000Z",
                total_amount=150,
            ),
        ]
        stats = compute_dashboard_stats([], rentals, [], [], now=NOW)
        assert stats.monthly_revenue == 150

    def test_expenses_outside_month_excluded(self, new_expenditure):
        expenditures = [
            new_expenditure(amount=100, date="2024-05-01"),
            new_expenditure(amount=50, date="2024-05-31T23:00:00.000Z"),
            new_expenditure(amount=2400, date="2024-03-15"),
            new_expenditure(amount=75, date="2024-06-01"),
        ]
        stats = compute_dashboard_stats([], [], [], expenditures, now=NOW)
        assert stats.monthly_expenses == 150

    def test_upcoming_maintenance_within_a_week(self, service):
        records = [
            service("2024-05-20"),
            service("2024-05-22"),
            service("2024-05-23"),
            service(None),
        ]
        stats = compute_dashboard_stats([], [], records, [], now=NOW)
        assert stats.upcoming_maintenance == 2

    def test_past_service_dates_still_count(self, service):
        stats = compute_dashboard_stats([], [], [service("2024-01-01")], [], now=NOW)
        assert stats.upcoming_maintenance == 1

    def test_defaults_to_current_time(self, new_expenditure):
        today = datetime.now().astimezone().date().isoformat()
        stats = compute_dashboard_stats([], [], [], [new_expenditure(date=today)])
        assert stats.monthly_expenses == 200


def test_fleet_recomputes_from_store(fleet, new_vehicle, new_rental):
    vehicle = fleet.vehicles.add(new_vehicle())
    assert fleet.compute_dashboard_stats(now=NOW).available_vehicles == 1
    fleet.rentals.add(new_rental(vehicle.id))
    stats = fleet.compute_dashboard_stats(now=NOW)
    assert stats.available_vehicles == 0
    assert stats.rented_vehicles == 1
    assert stats.active_rentals == 1


def test_maintenance_type_does_not_matter():
    record = Maintenance(
        vehicle_id="v-1",
        type=MaintenanceType.INSPECTION,
        description="Annual inspection",
        cost=0,
        service_date="2024-05-01",
        service_provider="DVLA",
        next_service_date="2024-05-16",
    )
    assert compute_dashboard_stats([], [], [record], [], now=NOW).upcoming_maintenance == 1
