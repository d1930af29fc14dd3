"""
Monthly rental report and list exports (CSV and Word-compatible HTML).

These consume repository list() results; filtering and sorting beyond the
monthly report is up to the caller.
"""

import csv
import html
import io
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from tabulate import tabulate

from .calculations import month_window
from .config import CURRENCY
from .expenditure import Expenditure
from .formatting import format_amount, format_date, text
from .rental import Rental
from .status import RentalStatus
from .vehicle import Vehicle

Headers = Sequence[Tuple[str, str]]

RENTAL_HEADERS: Headers = (
    ("id", "ID"),
    ("customerName", "Customer Name"),
    ("customerPhone", "Phone"),
    ("customerEmail", "Email"),
    ("vehicle", "Vehicle"),
    ("startDate", "Start Date"),
    ("expectedEndDate", "Expected End Date"),
    ("rentalRate", f"Daily Rate ({CURRENCY})"),
    ("status", "Status"),
)

AGREEMENT_HEADERS: Headers = (
    ("id", "Agreement ID"),
    ("customerName", "Customer Name"),
    ("customerPhone", "Phone"),
    ("customerEmail", "Email"),
    ("vehicleInfo", "Vehicle"),
    ("licensePlate", "License Plate"),
    ("startDate", "Start Date"),
    ("expectedEndDate", "Expected Return Date"),
    ("actualEndDate", "Actual Return Date"),
    ("rentalRate", f"Daily Rate ({CURRENCY})"),
    ("deposit", f"Deposit ({CURRENCY})"),
    ("status", "Status"),
    ("notes", "Notes"),
)

EXPENDITURE_HEADERS: Headers = (
    ("description", "Description"),
    ("category", "Category"),
    ("date", "Date"),
    ("amount", f"Amount ({CURRENCY})"),
    ("paymentMethod", "Payment Method"),
    ("notes", "Notes"),
)


# =============================================================================
# Monthly rental report
# =============================================================================


@dataclass
class RentalReport:
    """Rentals started in one month, with summary counts."""

    month: date
    rentals: List[Rental] = field(default_factory=list)

    def _count(self, status: RentalStatus) -> int:
        return sum(1 for r in self.rentals if r.status == status)

    @property
    def total_rentals(self) -> int:
        return len(self.rentals)

    @property
    def active_rentals(self) -> int:
        return self._count(RentalStatus.ACTIVE)

    @property
    def completed_rentals(self) -> int:
        return self._count(RentalStatus.COMPLETED)

    @property
    def overdue_rentals(self) -> int:
        return self._count(RentalStatus.OVERDUE)

    @property
    def total_revenue(self) -> float:
        return sum(r.total_amount or 0 for r in self.rentals)


def parse_month(value: str) -> date:
    """Parse 'YYYY-MM' into the first day of that month."""
    year, month = value.split("-")
    return date(int(year), int(month), 1)


def rental_report(
    rentals: List[Rental],
    month: date,
    vehicle_id: Optional[str] = None,
    customer: Optional[str] = None,
    status: Optional[str] = None,
) -> RentalReport:
    """
    Select rentals whose start date falls in the given month.

    Args:
        vehicle_id: Only rentals of this vehicle
        customer: Case-insensitive substring of the customer name
        status: Only rentals in this status
    """
    start, end = month_window(month)
    selected = []
    for rental in rentals:
        if not rental.start_date or not start <= rental.start_date <= end:
            continue
        if vehicle_id and rental.vehicle_id != vehicle_id:
            continue
        if customer and customer.lower() not in (rental.customer_name or "").lower():
            continue
        if status and text(rental.status) != text(status):
            continue
        selected.append(rental)
    return RentalReport(month=month.replace(day=1), rentals=selected)


# =============================================================================
# CSV exports
# =============================================================================


def vehicle_label(vehicle: Optional[Vehicle]) -> str:
    """'Toyota Corolla (2020)' or 'Unknown Vehicle'."""
    if vehicle is None:
        return "Unknown Vehicle"
    return f"{vehicle.make} {vehicle.model} ({vehicle.year})"


def to_csv(rows: List[Dict[str, object]], headers: Headers) -> str:
    """Render rows as CSV with a heading line. Missing values are blank."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([label for _, label in headers])
    for row in rows:
        writer.writerow(["" if row.get(key) is None else row[key] for key, _ in headers])
    return out.getvalue()


def rentals_csv(rentals: List[Rental], vehicles: List[Vehicle]) -> str:
    by_id = {v.id: v for v in vehicles}
    rows = [
        {
            "id": r.id,
            "customerName": r.customer_name,
            "customerPhone": r.customer_phone,
            "customerEmail": r.customer_email,
            "vehicle": vehicle_label(by_id.get(r.vehicle_id)),
            "startDate": format_date(r.start_date),
            "expectedEndDate": format_date(r.expected_end_date),
            "rentalRate": r.rental_rate,
            "status": text(r.status),
        }
        for r in rentals
    ]
    return to_csv(rows, RENTAL_HEADERS)


def rental_agreement_csv(rental: Rental, vehicle: Optional[Vehicle]) -> str:
    row = {
        "id": rental.id,
        "customerName": rental.customer_name,
        "customerPhone": rental.customer_phone,
        "customerEmail": rental.customer_email,
        "vehicleInfo": vehicle_label(vehicle),
        "licensePlate": vehicle.license_plate if vehicle else None,
        "startDate": format_date(rental.start_date),
        "expectedEndDate": format_date(rental.expected_end_date),
        "actualEndDate": format_date(rental.actual_end_date),
        "rentalRate": rental.rental_rate,
        "deposit": rental.deposit,
        "status": text(rental.status),
        "notes": rental.notes,
    }
    return to_csv([row], AGREEMENT_HEADERS)


def expenditures_csv(expenditures: List[Expenditure]) -> str:
    rows = [
        {
            "description": e.description,
            "category": text(e.category),
            "date": format_date(e.date),
            "amount": f"{e.amount:.2f}",
            "paymentMethod": text(e.payment_method),
            "notes": e.notes,
        }
        for e in expenditures
    ]
    return to_csv(rows, EXPENDITURE_HEADERS)


# =============================================================================
# Word export
# =============================================================================


def rentals_table(rentals: List[Rental]) -> Tuple[List[str], List[List[str]]]:
    headers = ["Customer", "Start Date", "End Date", f"Rate ({CURRENCY}/day)", "Status"]
    rows = [
        [
            f"{r.customer_name} ({r.customer_phone})",
            format_date(r.start_date),
            format_date(r.expected_end_date),
            format_amount(r.rental_rate),
            text(r.status),
        ]
        for r in rentals
    ]
    return headers, rows


def expenditures_table(expenditures: List[Expenditure]) -> Tuple[List[str], List[List[str]]]:
    headers = ["Description", "Category", "Date", f"Amount ({CURRENCY})", "Payment Method"]
    rows = [
        [
            e.description,
            text(e.category),
            format_date(e.date),
            format_amount(e.amount),
            text(e.payment_method),
        ]
        for e in expenditures
    ]
    return headers, rows


def word_document(title: str, headers: List[str], rows: List[List[str]]) -> str:
    """HTML page that Word opens as a document."""
    table = str(tabulate(rows, headers=headers, tablefmt="html"))
    title = html.escape(title)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; }}
    table {{ width: 100%; border-collapse: collapse; }}
    th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
    th {{ background-color: #f2f2f2; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  {table}
</body>
</html>
"""
