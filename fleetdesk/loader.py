"""Conversion between stored (camelCase) dicts and record objects."""

import re
from dataclasses import MISSING, fields
from datetime import date, datetime
from typing import Any, Dict, Type, TypeVar

from .calculations import now_iso
from .expenditure import Expenditure
from .maintenance import Maintenance
from .rental import Rental
from .status import (
    ExpenditureCategory,
    MaintenanceType,
    PaymentMethod,
    RentalStatus,
    VehicleStatus,
)
from .vehicle import Vehicle

T = TypeVar("T")

# Fields holding enum values, per record class
ENUM_FIELDS = {
    Vehicle: {"status": VehicleStatus},
    Rental: {"status": RentalStatus},
    Maintenance: {"type": MaintenanceType},
    Expenditure: {"category": ExpenditureCategory, "payment_method": PaymentMethod},
}


def camel(name: str) -> str:
    """license_plate -> licensePlate"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def snake(name: str) -> str:
    """licensePlate -> license_plate"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _iso(value: Any) -> Any:
    """YAML turns unquoted dates into date objects; store them as strings."""
    if isinstance(value, datetime):
        return now_iso(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _enum(enum_cls, value: Any) -> Any:
    """Coerce to the enum, keeping unknown values as-is for the validator."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


def parse_record(cls: Type[T], dct: Dict[str, Any]) -> T:
    """
    Build a record from a stored dict.

    Missing keys take the field default, or None for mandatory fields so
    the validator can report them.
    """
    if not isinstance(dct, dict):
        raise TypeError(f"Expected a mapping for {cls.__name__}, got {type(dct).__name__}")
    enums = ENUM_FIELDS.get(cls, {})
    kwargs = {}
    for f in fields(cls):
        value = _iso(dct.get(camel(f.name)))
        if value is None and f.default is not MISSING:
            continue
        if value is not None and f.name in enums:
            value = _enum(enums[f.name], value)
        kwargs[f.name] = value
    return cls(**kwargs)


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Serialize a record to the stored dict format, omitting None values."""
    d: Dict[str, Any] = {}
    if record.id is not None:
        d["id"] = record.id
    for f in fields(record):
        value = getattr(record, f.name)
        if f.name == "id" or value is None:
            continue
        d[camel(f.name)] = getattr(value, "value", value)
    return d


def parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    return parse_record(Vehicle, dct)


def parse_rental(dct: Dict[str, Any]) -> Rental:
    return parse_record(Rental, dct)


def parse_maintenance(dct: Dict[str, Any]) -> Maintenance:
    return parse_record(Maintenance, dct)


def parse_expenditure(dct: Dict[str, Any]) -> Expenditure:
    return parse_record(Expenditure, dct)
