"""Sample fleet written to an empty store on first start."""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from .calculations import now_iso, rental_total
from .config import EXPENDITURES, MAINTENANCE, RENTALS, VEHICLES
from .errors import StorageError
from .expenditure import Expenditure
from .loader import record_to_dict
from .logger import get_logger
from .maintenance import Maintenance
from .notifier import Notifier
from .rental import Rental
from .status import (
    ExpenditureCategory,
    MaintenanceType,
    PaymentMethod,
    RentalStatus,
    VehicleStatus,
)
from .store import Collection
from .vehicle import Vehicle

logger = get_logger(__name__)


def sample_data(now: datetime) -> Dict[str, List[Any]]:
    """
    Build the sample records, dated relative to now.

    The records describe an already-settled fleet: the Civic is rented
    and the Ranger is in the workshop, matching the rental and
    maintenance records that reference them.
    """
    today = now_iso(now)
    last_month = now_iso(now - relativedelta(months=1))
    two_months_ago = now_iso(now - relativedelta(months=2))
    yesterday = now_iso(now - timedelta(days=1))
    next_week = now_iso(now + timedelta(days=7))

    vehicles = [
        Vehicle(
            id="v-1",
            make="Toyota",
            model="Corolla",
            year=2020,
            license_plate="GR 1234-20",
            status=VehicleStatus.AVAILABLE,
            fuel_type="Petrol",
            odometer=45000,
            last_maintenance=last_month,
            notes="Regular servicing up to date",
            date_added=last_month,
            last_updated=today,
        ),
        Vehicle(
            id="v-2",
            make="Honda",
            model="Civic",
            year=2019,
            license_plate="GR 5678-19",
            status=VehicleStatus.RENTED,
            fuel_type="Petrol",
            odometer=62000,
            last_maintenance=last_month,
            notes="Minor scratch on rear bumper",
            date_added=last_month,
            last_updated=today,
        ),
        Vehicle(
            id="v-3",
            make="Ford",
            model="Ranger",
            year=2021,
            license_plate="GE 9012-21",
            status=VehicleStatus.MAINTENANCE,
            fuel_type="Diesel",
            odometer=38000,
            last_maintenance=today,
            notes="In for brake replacement",
            date_added=last_month,
            last_updated=today,
        ),
    ]

    rentals = [
        Rental(
            id="r-1",
            vehicle_id="v-2",
            customer_name="John Mensah",
            customer_phone="+233 50 123 4567",
            customer_email="john.mensah@example.com",
            start_date=yesterday,
            expected_end_date=next_week,
            rental_rate=150,
            total_amount=rental_total(yesterday, next_week, 150),
            deposit=300,
            status=RentalStatus.ACTIVE,
            notes="Regular customer",
            date_created=yesterday,
            last_updated=yesterday,
        ),
    ]

    maintenance = [
        Maintenance(
            id="m-1",
            vehicle_id="v-3",
            type=MaintenanceType.REPAIR,
            description="Brake pad and rotor replacement",
            cost=800,
            service_date=today,
            next_service_date=next_week,
            service_provider="AutoFix Garage",
            notes="All four wheels",
            date_created=today,
            last_updated=today,
        ),
    ]

    expenditures = [
        Expenditure(
            id="e-1",
            vehicle_id="v-1",
            category=ExpenditureCategory.FUEL,
            amount=200,
            date=yesterday,
            description="Full tank refuel",
            payment_method=PaymentMethod.MOBILE_MONEY,
            date_created=yesterday,
            last_updated=yesterday,
        ),
        Expenditure(
            id="e-2",
            vehicle_id="v-3",
            category=ExpenditureCategory.MAINTENANCE,
            amount=800,
            date=today,
            description="Brake replacement",
            payment_method=PaymentMethod.CARD,
            date_created=today,
            last_updated=today,
        ),
        Expenditure(
            id="e-3",
            category=ExpenditureCategory.INSURANCE,
            amount=2400,
            date=two_months_ago,
            description="Annual insurance premium for fleet",
            payment_method=PaymentMethod.BANK_TRANSFER,
            date_created=two_months_ago,
            last_updated=two_months_ago,
        ),
    ]

    return {
        VEHICLES: vehicles,
        RENTALS: rentals,
        MAINTENANCE: maintenance,
        EXPENDITURES: expenditures,
    }


def ensure_seeded(store, notifier: Optional[Notifier] = None, now: Optional[datetime] = None) -> bool:
    """
    Write the sample fleet if the vehicle collection is empty.

    Writes all four collections directly, without the repositories'
    side effects. A store whose vehicles cannot be read is left alone.
    Returns True when all of the sample data was written.
    """
    try:
        if store.read(VEHICLES):
            return False
    except StorageError as e:
        logger.error("Not seeding, vehicles could not be read: %s", e)
        return False

    notifier = notifier or Notifier()
    saved = [
        Collection(store, key, None, record_to_dict, notifier).save(records)
        for key, records in sample_data(now or datetime.now().astimezone()).items()
    ]
    if not all(saved):
        logger.error("Seeding incomplete, some collections could not be written")
        return False
    logger.info("Seeded store with sample fleet data")
    return True
