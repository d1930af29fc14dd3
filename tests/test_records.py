#!/usr/bin/env python3
"""Tests for record dataclasses and their derived properties."""

from fleetdesk import DashboardStats, RentalStatus, VehicleStatus


class TestVehicle:
    """Tests for Vehicle."""

    def test_defaults(self, new_vehicle):
        vehicle = new_vehicle()
        assert vehicle.status == VehicleStatus.AVAILABLE
        assert vehicle.id is None
        assert vehicle.last_maintenance is None

    def test_is_rentable_only_when_available(self, new_vehicle):
        assert new_vehicle().is_rentable
        assert not new_vehicle(status=VehicleStatus.RENTED).is_rentable
        assert not new_vehicle(status=VehicleStatus.MAINTENANCE).is_rentable


class TestRental:
    """Tests for Rental."""

    def test_defaults(self, new_rental):
        rental = new_rental("v-1")
        assert rental.status == RentalStatus.ACTIVE
        assert rental.deposit == 0
        assert rental.total_amount is None

    def test_end_date_is_expected_while_active(self, new_rental):
        rental = new_rental("v-1", actual_end_date="2024-01-02")
        assert rental.end_date == "2024-01-03"

    def test_end_date_is_actual_once_completed(self, new_rental):
        rental = new_rental(
            "v-1", status=RentalStatus.COMPLETED, actual_end_date="2024-01-02"
        )
        assert rental.end_date == "2024-01-02"
        assert rental.days == 2

    def test_days(self, new_rental):
        assert new_rental("v-1").days == 3


class TestExpenditure:
    def test_fleet_wide_without_vehicle(self, new_expenditure):
        assert new_expenditure().is_fleet_wide
        assert not new_expenditure(vehicle_id="v-1").is_fleet_wide


class TestDashboardStats:
    """Tests for DashboardStats."""

    def test_defaults_are_zero(self):
        stats = DashboardStats()
        assert stats.total_vehicles == 0
        assert stats.monthly_profit == 0

    def test_monthly_profit(self):
        stats = DashboardStats(monthly_revenue=450, monthly_expenses=200)
        assert stats.monthly_profit == 250

    def test_to_dict_uses_camel_case(self):
        d = DashboardStats(total_vehicles=3, upcoming_maintenance=1).to_dict()
        assert d["totalVehicles"] == 3
        assert d["upcomingMaintenance"] == 1
        assert "total_vehicles" not in d
