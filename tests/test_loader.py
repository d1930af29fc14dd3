#!/usr/bin/env python3
"""Tests for converting between stored dicts and records."""

from datetime import date

import pytest

from fleetdesk import (
    ExpenditureCategory,
    PaymentMethod,
    RentalStatus,
    Vehicle,
    VehicleStatus,
)
from fleetdesk.loader import (
    camel,
    parse_expenditure,
    parse_record,
    parse_rental,
    parse_vehicle,
    record_to_dict,
    snake,
)


class TestNames:
    def test_camel(self):
        assert camel("license_plate") == "licensePlate"
        assert camel("expected_end_date") == "expectedEndDate"
        assert camel("make") == "make"

    def test_snake(self):
        assert snake("licensePlate") == "license_plate"
        assert snake("expectedEndDate") == "expected_end_date"
        assert snake("id") == "id"


class TestParseVehicle:
    """Tests for parse_vehicle."""

    def test_full_record(self):
        vehicle = parse_vehicle(
            {
                "id": "v-1",
                "make": "Toyota",
                "model": "Corolla",
                "year": 2020,
                "licensePlate": "GR 1234-20",
                "status": "rented",
                "fuelType": "Petrol",
                "odometer": 45000,
                "dateAdded": "2024-01-01T00:00:00.000Z",
            }
        )
        assert vehicle.id == "v-1"
        assert vehicle.license_plate == "GR 1234-20"
        assert vehicle.status is VehicleStatus.RENTED
        assert vehicle.date_added == "2024-01-01T00:00:00.000Z"

    def test_missing_fields_take_defaults(self):
        vehicle = parse_vehicle({"make": "Toyota"})
        assert vehicle.status == VehicleStatus.AVAILABLE
        assert vehicle.odometer == 0
        assert vehicle.model is None
        assert vehicle.notes is None

    def test_unknown_enum_value_is_kept(self):
        vehicle = parse_vehicle({"make": "Toyota", "status": "stolen"})
        assert vehicle.status == "stolen"

    def test_yaml_dates_become_strings(self):
        vehicle = parse_vehicle({"make": "Toyota", "lastMaintenance": date(2024, 5, 1)})
        assert vehicle.last_maintenance == "2024-05-01"

    def test_not_a_mapping_raises(self):
        with pytest.raises(TypeError):
            parse_vehicle(["make", "Toyota"])


class TestParseOthers:
    def test_rental_status(self):
        rental = parse_rental({"vehicleId": "v-1", "status": "completed"})
        assert rental.status is RentalStatus.COMPLETED
        assert rental.vehicle_id == "v-1"

    def test_expenditure_enums(self):
        expenditure = parse_expenditure(
            {"category": "fuel", "paymentMethod": "mobile_money", "amount": 200}
        )
        assert expenditure.category is ExpenditureCategory.FUEL
        assert expenditure.payment_method is PaymentMethod.MOBILE_MONEY
        assert expenditure.vehicle_id is None


class TestRecordToDict:
    """Tests for record_to_dict."""

    def test_id_first_and_camel_case(self):
        vehicle = Vehicle(
            make="Toyota",
            model="Corolla",
            year=2020,
            license_plate="GR 1234-20",
            fuel_type="Petrol",
            id="v-1",
        )
        d = record_to_dict(vehicle)
        assert list(d)[0] == "id"
        assert d["licensePlate"] == "GR 1234-20"
        assert d["fuelType"] == "Petrol"

    def test_omits_none(self, new_vehicle):
        d = record_to_dict(new_vehicle())
        assert "id" not in d
        assert "notes" not in d
        assert "lastMaintenance" not in d

    def test_enums_stored_as_plain_values(self, new_expenditure):
        d = record_to_dict(new_expenditure(payment_method=PaymentMethod.BANK_TRANSFER))
        assert d["category"] == "fuel"
        assert d["paymentMethod"] == "bank_transfer"
        assert type(d["paymentMethod"]) is str

    def test_parse_record_reverses_it(self, new_rental):
        rental = new_rental("v-1", id="r-1", notes="Regular customer")
        assert parse_record(type(rental), record_to_dict(rental)) == rental
