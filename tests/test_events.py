#!/usr/bin/env python3
"""Tests for the vehicle status changes implied by lifecycle events."""

import pytest

from fleetdesk import VehicleStatus
from fleetdesk.events import (
    MaintenanceCompleted,
    MaintenanceOpened,
    MaintenanceUpdated,
    RentalCompleted,
    RentalCreated,
    vehicle_changes,
)


class TestRentalEvents:
    def test_created_rents_available_vehicle(self, new_vehicle):
        changes = vehicle_changes(new_vehicle(), RentalCreated("v-1"))
        assert changes == {"status": VehicleStatus.RENTED}

    @pytest.mark.parametrize(
        "status",
        [VehicleStatus.RENTED, VehicleStatus.MAINTENANCE, VehicleStatus.UNAVAILABLE],
    )
    def test_created_leaves_other_statuses(self, new_vehicle, status):
        assert vehicle_changes(new_vehicle(status=status), RentalCreated("v-1")) == {}

    def test_completed_frees_vehicle(self, new_vehicle):
        vehicle = new_vehicle(status=VehicleStatus.RENTED)
        assert vehicle_changes(vehicle, RentalCompleted("v-1")) == {
            "status": VehicleStatus.AVAILABLE
        }


class TestMaintenanceEvents:
    def test_opened_moves_to_maintenance(self, new_vehicle):
        changes = vehicle_changes(new_vehicle(), MaintenanceOpened("v-1", "2024-02-01"))
        assert changes == {
            "status": VehicleStatus.MAINTENANCE,
            "last_maintenance": "2024-02-01",
        }

    def test_opened_while_in_maintenance_is_noop(self, new_vehicle):
        vehicle = new_vehicle(status=VehicleStatus.MAINTENANCE)
        assert vehicle_changes(vehicle, MaintenanceOpened("v-1", "2024-02-01")) == {}

    def test_updated_refreshes_last_maintenance_only(self, new_vehicle):
        vehicle = new_vehicle(status=VehicleStatus.RENTED)
        assert vehicle_changes(vehicle, MaintenanceUpdated("v-1", "2024-03-01")) == {
            "last_maintenance": "2024-03-01"
        }

    def test_completed_frees_vehicle_in_maintenance(self, new_vehicle):
        vehicle = new_vehicle(status=VehicleStatus.MAINTENANCE)
        changes = vehicle_changes(
            vehicle, MaintenanceCompleted("v-1", "2024-02-02T10:00:00.000Z")
        )
        assert changes == {
            "status": VehicleStatus.AVAILABLE,
            "last_maintenance": "2024-02-02T10:00:00.000Z",
        }

    def test_completed_on_other_status_is_noop(self, new_vehicle):
        vehicle = new_vehicle(status=VehicleStatus.RENTED)
        assert vehicle_changes(vehicle, MaintenanceCompleted("v-1", "2024-02-02")) == {}


def test_unknown_event_raises(new_vehicle):
    with pytest.raises(TypeError):
        vehicle_changes(new_vehicle(), object())
