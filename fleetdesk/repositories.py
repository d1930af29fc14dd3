"""
Repositories for the four fleet collections.

Each repository owns the mutation path of one collection: id generation,
timestamps, validation and persistence. Every mutation reads the whole
collection, changes it in memory and writes the whole collection back.

Rental and maintenance repositories also move vehicle status, by handing a
lifecycle event to the vehicle repository once their own record has been
written. A failed primary write leaves the vehicle untouched. The two
writes are not transactional: if the vehicle write fails, the rental or
maintenance record stays persisted.
"""

from dataclasses import replace
from datetime import date
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from .calculations import new_id, now_iso, rental_total, to_date
from .config import EXPENDITURES, MAINTENANCE, RENTALS, VEHICLES
from .errors import ConflictError, NotFoundError, ValidationError
from .events import (
    MaintenanceCompleted,
    MaintenanceOpened,
    MaintenanceUpdated,
    RentalCompleted,
    RentalCreated,
    vehicle_changes,
)
from .expenditure import Expenditure
from .formatting import format_amount, text
from .loader import (
    parse_expenditure,
    parse_maintenance,
    parse_rental,
    parse_vehicle,
    record_to_dict,
)
from .logger import get_logger
from .maintenance import Maintenance
from .notifier import Notifier
from .rental import Rental
from .status import RentalStatus
from .store import Collection
from .validation import validate_record
from .vehicle import Vehicle

logger = get_logger(__name__)

T = TypeVar("T")


class Repository(Generic[T]):
    """Shared list/get/insert/replace/remove logic over one collection."""

    key: str
    kind: str
    id_prefix: str
    label: str
    created_field = "date_created"
    search_fields: Tuple[str, ...] = ()
    parse: Callable

    def __init__(self, store, notifier: Optional[Notifier] = None):
        self.notifier = notifier or Notifier()
        self.collection: Collection[T] = Collection(
            store, self.key, type(self).parse, record_to_dict, self.notifier
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self) -> List[T]:
        """Every record in stored order. Empty on a read failure."""
        return self.collection.load()

    def get_by_id(self, record_id: str) -> Optional[T]:
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def get_for_vehicle(self, vehicle_id: str) -> List[T]:
        return [r for r in self.list() if r.vehicle_id == vehicle_id]

    def search(self, term: str) -> List[T]:
        """Case-insensitive substring match over the searchable fields."""
        term = (term or "").lower()
        return [r for r in self.list() if term in self._search_text(r)]

    def _search_text(self, record: T) -> str:
        values = (text(getattr(record, f)) for f in self.search_fields)
        return " ".join(str(v) for v in values if v is not None).lower()

    # -------------------------------------------------------------------------
    # Mutation helpers
    # -------------------------------------------------------------------------

    def _check(self, record: T, previous: Optional[T]) -> Dict[str, str]:
        """Rules beyond the schema. Runs only once the schema passes."""
        return {}

    def _prepare(self, record: T) -> T:
        """Derive computed fields on a validated record before it is stored."""
        return record

    def _validate(self, record: T, previous: Optional[T] = None) -> None:
        errors = validate_record(self.kind, record_to_dict(record))
        if not errors:
            errors = self._check(record, previous)
        if errors:
            self.notifier.error("Validation Error", "Please fill in all required fields.")
            raise ValidationError(errors)

    def _not_found(self, title: str) -> NotFoundError:
        self.notifier.error(title, f"{self.label} not found.")
        return NotFoundError(f"{self.label} not found")

    @staticmethod
    def _index(records: List[T], record_id: Optional[str]) -> Optional[int]:
        for i, record in enumerate(records):
            if record.id == record_id:
                return i
        return None

    def _insert(self, record: T) -> Tuple[T, bool]:
        """Validate, stamp and append a new record. Returns (record, saved)."""
        self._validate(record)
        now = now_iso()
        record = replace(
            self._prepare(record),
            id=new_id(self.id_prefix),
            last_updated=now,
            **{self.created_field: now},
        )
        records = self.list()
        records.append(record)
        return record, self.collection.save(records)

    def _replace(self, record: T) -> Tuple[T, T, bool]:
        """
        Validate and replace a stored record in place.

        Returns (previous, record, saved). The creation timestamp of the
        stored record is kept.
        """
        records = self.list()
        index = self._index(records, record.id)
        if index is None:
            raise self._not_found("Update Failed")
        previous = records[index]
        self._validate(record, previous)
        record = replace(
            self._prepare(record),
            last_updated=now_iso(),
            **{self.created_field: getattr(previous, self.created_field)},
        )
        records[index] = record
        return previous, record, self.collection.save(records)

    def _remove(self, record_id: str, guard: Optional[Callable[[T], None]] = None) -> Tuple[T, bool]:
        """Remove a record. guard may raise to block the delete."""
        records = self.list()
        index = self._index(records, record_id)
        if index is None:
            raise self._not_found("Delete Failed")
        record = records[index]
        if guard is not None:
            guard(record)
        del records[index]
        return record, self.collection.save(records)


class VehicleRepository(Repository[Vehicle]):
    key = VEHICLES
    kind = "vehicle"
    id_prefix = "v"
    label = "Vehicle"
    created_field = "date_added"
    search_fields = ("make", "model", "license_plate")
    parse = staticmethod(parse_vehicle)

    def __init__(self, store, notifier: Optional[Notifier] = None):
        super().__init__(store, notifier)
        # Repositories whose records reference vehicles; they block deletes
        self.dependents: List[Repository] = []

    def rentable(self, current_vehicle_id: Optional[str] = None) -> List[Vehicle]:
        """Vehicles offered for a rental: available ones, plus the rental's own."""
        return [
            v
            for v in self.list()
            if v.is_rentable or v.id == current_vehicle_id
        ]

    def add(self, vehicle: Vehicle) -> Vehicle:
        vehicle, saved = self._insert(vehicle)
        if saved:
            self.notifier.success(
                "Vehicle Added",
                f"{vehicle.make} {vehicle.model} has been added to the fleet.",
            )
        return vehicle

    def update(self, vehicle: Vehicle) -> Vehicle:
        _, vehicle, saved = self._replace(vehicle)
        if saved:
            self.notifier.success(
                "Vehicle Updated", f"{vehicle.make} {vehicle.model} has been updated."
            )
        return vehicle

    def delete(self, vehicle_id: str) -> None:
        vehicle, saved = self._remove(vehicle_id, guard=self._ensure_unreferenced)
        if saved:
            self.notifier.success(
                "Vehicle Deleted",
                f"{vehicle.make} {vehicle.model} has been removed from the fleet.",
            )

    def _ensure_unreferenced(self, vehicle: Vehicle) -> None:
        if any(repo.get_for_vehicle(vehicle.id) for repo in self.dependents):
            self.notifier.error(
                "Delete Failed",
                "Vehicle has associated rentals or maintenance records.",
            )
            raise ConflictError("Vehicle has associated records")

    def apply(self, event) -> Optional[Vehicle]:
        """
        Apply a lifecycle event to the vehicle it names.

        Returns the updated vehicle, or None when the vehicle is missing or
        the event does not change it.
        """
        vehicle = self.get_by_id(event.vehicle_id)
        if vehicle is None:
            logger.warning("%s refers to unknown vehicle %s", type(event).__name__, event.vehicle_id)
            return None
        changes = vehicle_changes(vehicle, event)
        if not changes:
            return None
        return self.update(replace(vehicle, **changes))


class RentalRepository(Repository[Rental]):
    key = RENTALS
    kind = "rental"
    id_prefix = "r"
    label = "Rental"
    search_fields = ("customer_name", "customer_phone", "customer_email")
    parse = staticmethod(parse_rental)

    def __init__(self, store, vehicles: VehicleRepository, notifier: Optional[Notifier] = None):
        super().__init__(store, notifier)
        self.vehicles = vehicles

    def get_active_for_vehicle(self, vehicle_id: str) -> List[Rental]:
        return [
            r for r in self.get_for_vehicle(vehicle_id) if r.status == RentalStatus.ACTIVE
        ]

    def _check(self, rental: Rental, previous: Optional[Rental]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        dates: Dict[str, date] = {}
        for name in ("start_date", "expected_end_date", "actual_end_date"):
            value = getattr(rental, name)
            if value:
                try:
                    dates[name] = to_date(value)
                except ValueError:
                    errors[name] = "Not a valid date"
        start = dates.get("start_date")
        if start is not None:
            for name, title in (
                ("expected_end_date", "Expected return date"),
                ("actual_end_date", "Actual return date"),
            ):
                if name in dates and dates[name] < start:
                    errors[name] = f"{title} cannot be before the start date"
        if previous is not None and rental.vehicle_id != previous.vehicle_id:
            errors["vehicle_id"] = "Vehicle cannot be changed on an existing rental"
        return errors

    def _prepare(self, rental: Rental) -> Rental:
        # Projection until completed, then billed to the actual return date
        return replace(
            rental,
            total_amount=rental_total(rental.start_date, rental.end_date, rental.rental_rate),
        )

    def add(self, rental: Rental) -> Rental:
        rental, saved = self._insert(rental)
        if saved:
            self.vehicles.apply(RentalCreated(rental.vehicle_id))
            self.notifier.success(
                "Rental Created", f"Rental for {rental.customer_name} has been created."
            )
        return rental

    def update(self, rental: Rental) -> Rental:
        previous, rental, saved = self._replace(rental)
        if not saved:
            return rental
        if (
            previous.status == RentalStatus.ACTIVE
            and rental.status == RentalStatus.COMPLETED
        ):
            self.vehicles.apply(RentalCompleted(rental.vehicle_id))
        self.notifier.success(
            "Rental Updated", f"Rental for {rental.customer_name} has been updated."
        )
        return rental

    def delete(self, rental_id: str) -> None:
        """Delete a rental. The vehicle status is left as it is."""
        rental, saved = self._remove(rental_id)
        if saved:
            self.notifier.success(
                "Rental Deleted", f"Rental for {rental.customer_name} has been deleted."
            )


class MaintenanceRepository(Repository[Maintenance]):
    key = MAINTENANCE
    kind = "maintenance"
    id_prefix = "m"
    label = "Maintenance record"
    search_fields = ("service_provider", "type", "description")
    parse = staticmethod(parse_maintenance)

    def __init__(self, store, vehicles: VehicleRepository, notifier: Optional[Notifier] = None):
        super().__init__(store, notifier)
        self.vehicles = vehicles

    def add(self, maintenance: Maintenance) -> Maintenance:
        maintenance, saved = self._insert(maintenance)
        if saved:
            self.vehicles.apply(
                MaintenanceOpened(maintenance.vehicle_id, maintenance.service_date)
            )
            self.notifier.success(
                "Maintenance Recorded", "Maintenance record has been created."
            )
        return maintenance

    def update(self, maintenance: Maintenance) -> Maintenance:
        _, maintenance, saved = self._replace(maintenance)
        if saved:
            self.notifier.success(
                "Maintenance Updated", "Maintenance record has been updated."
            )
            self.vehicles.apply(
                MaintenanceUpdated(maintenance.vehicle_id, maintenance.service_date)
            )
        return maintenance

    def complete(self, maintenance_id: str) -> None:
        """
        Finish the service: the vehicle goes back to available.

        The maintenance record itself is not changed. Completing a record
        whose vehicle is no longer in maintenance does nothing.
        """
        maintenance = self.get_by_id(maintenance_id)
        if maintenance is None:
            raise self._not_found("Action Failed")
        vehicle = self.vehicles.apply(
            MaintenanceCompleted(maintenance.vehicle_id, now_iso())
        )
        if vehicle is not None:
            self.notifier.success("Maintenance Completed", "Vehicle is now available.")
        else:
            logger.info(
                "Maintenance %s completed; vehicle %s was not in maintenance",
                maintenance_id,
                maintenance.vehicle_id,
            )

    def delete(self, maintenance_id: str) -> None:
        _, saved = self._remove(maintenance_id)
        if saved:
            self.notifier.success(
                "Maintenance Record Deleted", "Maintenance record has been deleted."
            )


class ExpenditureRepository(Repository[Expenditure]):
    """Expenditures have no side effects on other collections."""

    key = EXPENDITURES
    kind = "expenditure"
    id_prefix = "e"
    label = "Expenditure"
    search_fields = ("description", "category")
    parse = staticmethod(parse_expenditure)

    def add(self, expenditure: Expenditure) -> Expenditure:
        expenditure, saved = self._insert(expenditure)
        if saved:
            self.notifier.success(
                "Expenditure Added",
                f"{format_amount(expenditure.amount)} expenditure has been recorded.",
            )
        return expenditure

    def update(self, expenditure: Expenditure) -> Expenditure:
        _, expenditure, saved = self._replace(expenditure)
        if saved:
            self.notifier.success(
                "Expenditure Updated",
                f"{format_amount(expenditure.amount)} expenditure has been updated.",
            )
        return expenditure

    def delete(self, expenditure_id: str) -> None:
        expenditure, saved = self._remove(expenditure_id)
        if saved:
            self.notifier.success(
                "Expenditure Deleted",
                f"{format_amount(expenditure.amount)} expenditure has been deleted.",
            )
