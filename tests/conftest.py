"""Shared fixtures: an in-memory fleet and record builders."""

import pytest

from fleetdesk import (
    Expenditure,
    ExpenditureCategory,
    Fleet,
    Maintenance,
    MaintenanceType,
    MemoryStore,
    PaymentMethod,
    Rental,
    Vehicle,
)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def fleet(store):
    return Fleet(store)


@pytest.fixture
def new_vehicle():
    """Build an unsaved vehicle; keyword arguments override the defaults."""

    def build(**overrides):
        fields = dict(
            make="Toyota",
            model="Corolla",
            year=2020,
            license_plate="GR 1234-20",
            fuel_type="Petrol",
            odometer=45000,
        )
        fields.update(overrides)
        return Vehicle(**fields)

    return build


@pytest.fixture
def new_rental():
    def build(vehicle_id, **overrides):
        fields = dict(
            vehicle_id=vehicle_id,
            customer_name="Ama Owusu",
            customer_phone="+233 24 555 0101",
            start_date="2024-01-01",
            expected_end_date="2024-01-03",
            rental_rate=150,
        )
        fields.update(overrides)
        return Rental(**fields)

    return build


@pytest.fixture
def new_maintenance():
    def build(vehicle_id, **overrides):
        fields = dict(
            vehicle_id=vehicle_id,
            type=MaintenanceType.ROUTINE,
            description="Oil change",
            cost=120,
            service_date="2024-02-01",
            service_provider="AutoFix Garage",
        )
        fields.update(overrides)
        return Maintenance(**fields)

    return build


@pytest.fixture
def new_expenditure():
    def build(**overrides):
        fields = dict(
            category=ExpenditureCategory.FUEL,
            amount=200,
            date="2024-05-10",
            description="Full tank refuel",
            payment_method=PaymentMethod.CASH,
        )
        fields.update(overrides)
        return Expenditure(**fields)

    return build
