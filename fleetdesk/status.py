"""Enumerations for record status and classification fields."""

from enum import Enum


class VehicleStatus(str, Enum):
    """Availability of a vehicle. Only AVAILABLE vehicles can be newly rented."""

    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"
    UNAVAILABLE = "unavailable"


class RentalStatus(str, Enum):
    """Lifecycle of a rental agreement."""

    ACTIVE = "active"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class MaintenanceType(str, Enum):
    ROUTINE = "routine"
    REPAIR = "repair"
    INSPECTION = "inspection"


class ExpenditureCategory(str, Enum):
    FUEL = "fuel"
    MAINTENANCE = "maintenance"
    INSURANCE = "insurance"
    TAX = "tax"
    OTHER = "other"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"
