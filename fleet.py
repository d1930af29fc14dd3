#!/usr/bin/env python3
"""
Unified CLI for the fleet back office.

Commands:
  seed                 - Load the sample fleet into an empty data directory
  dashboard            - Show fleet counts and this month's money
  vehicles             - List vehicles
  rentals              - List rentals
  maintenance          - List maintenance records
  expenditures         - List expenditures
  report               - Monthly rental report
  export               - Export rentals or expenditures as CSV or Word
  return-rental        - Mark a rental completed and free its vehicle
  complete-maintenance - Finish a service and free its vehicle
"""

import argparse
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from fleetdesk import (
    Expenditure,
    Fleet,
    FleetError,
    Maintenance,
    Rental,
    RentalStatus,
    ValidationError,
    Vehicle,
)
from fleetdesk.config import DATA_DIR
from fleetdesk.formatting import format_amount, format_date, text, truncate
from fleetdesk.reports import (
    expenditures_csv,
    expenditures_table,
    parse_month,
    rental_report,
    rentals_csv,
    rentals_table,
    vehicle_label,
    word_document,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format odometer reading for display."""
    return f"{km:,.0f} km" if km is not None else "-"


def print_notices(fleet: Fleet) -> None:
    """Print notices posted by the last operation."""
    for notice in fleet.notifier.drain():
        prefix = "!" if notice.is_error else "*"
        print(f"{prefix} {notice.title}: {notice.description}")


def print_validation_errors(error: ValidationError) -> None:
    print(f"Error: {error.args[0]}")
    for field, message in sorted(error.errors.items()):
        print(f"  {field}: {message}")


# =============================================================================
# Table builders
# =============================================================================


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    return [
        [
            v.id,
            f"{v.make} {v.model}",
            v.year,
            v.license_plate,
            text(v.status),
            format_km(v.odometer),
            format_date(v.last_maintenance) or "-",
        ]
        for v in vehicles
    ]


def make_rental_table(rentals: List[Rental], vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert rentals to table rows, naming each vehicle."""
    by_id = {v.id: v for v in vehicles}
    return [
        [
            r.id,
            r.customer_name,
            r.customer_phone,
            vehicle_label(by_id.get(r.vehicle_id)),
            format_date(r.start_date),
            format_date(r.actual_end_date or r.expected_end_date),
            format_amount(r.total_amount),
            text(r.status),
        ]
        for r in rentals
    ]


def make_maintenance_table(records: List[Maintenance], vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    by_id = {v.id: v for v in vehicles}
    return [
        [
            m.id,
            vehicle_label(by_id.get(m.vehicle_id)),
            text(m.type),
            truncate(m.description),
            format_amount(m.cost),
            format_date(m.service_date),
            format_date(m.next_service_date) or "-",
            m.service_provider,
        ]
        for m in records
    ]


def make_expenditure_table(expenditures: List[Expenditure], vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert expenditures to table rows. Fleet-wide costs show 'Fleet'."""
    by_id = {v.id: v for v in vehicles}
    return [
        [
            e.id,
            format_date(e.date),
            text(e.category),
            truncate(e.description),
            "Fleet" if e.is_fleet_wide else vehicle_label(by_id.get(e.vehicle_id)),
            format_amount(e.amount),
            text(e.payment_method),
        ]
        for e in expenditures
    ]


# =============================================================================
# Commands
# =============================================================================


def cmd_seed(fleet: Fleet, args) -> int:
    """Load the sample fleet into an empty data directory."""
    if fleet.ensure_seeded():
        print(f"Sample data written to {args.data_dir}")
        return 0
    if fleet.notifier.notices:
        print_notices(fleet)
        return 1
    print("Store already has vehicles; nothing written.")
    return 0


def cmd_dashboard(fleet: Fleet, args) -> int:
    """Show fleet counts and this month's money."""
    stats = fleet.compute_dashboard_stats()
    rows = [
        ["Total vehicles", stats.total_vehicles],
        ["Available", stats.available_vehicles],
        ["Rented", stats.rented_vehicles],
        ["In maintenance", stats.maintenance_vehicles],
        ["Unavailable", stats.unavailable_vehicles],
        ["Active rentals", stats.active_rentals],
        ["Overdue rentals", stats.overdue_rentals],
        ["Revenue this month", format_amount(stats.monthly_revenue)],
        ["Expenses this month", format_amount(stats.monthly_expenses)],
        ["Maintenance due within a week", stats.upcoming_maintenance],
    ]
    print(tabulate(rows, tablefmt="simple"))
    return 0


def cmd_vehicles(fleet: Fleet, args) -> int:
    """List vehicles."""
    vehicles = fleet.vehicles.search(args.search) if args.search else fleet.vehicles.list()
    if args.status:
        vehicles = [v for v in vehicles if text(v.status) == args.status]
    if args.rentable:
        rentable = {v.id for v in fleet.vehicles.rentable()}
        vehicles = [v for v in vehicles if v.id in rentable]

    if not vehicles:
        print("No vehicles found.")
        return 0

    headers = ["ID", "Vehicle", "Year", "Plate", "Status", "Odometer", "Last Service"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))
    return 0


def cmd_rentals(fleet: Fleet, args) -> int:
    """List rentals."""
    rentals = fleet.rentals.search(args.search) if args.search else fleet.rentals.list()
    if args.vehicle:
        rentals = [r for r in rentals if r.vehicle_id == args.vehicle]
    if args.status:
        rentals = [r for r in rentals if text(r.status) == args.status]

    if not rentals:
        print("No rentals found.")
        return 0

    headers = ["ID", "Customer", "Phone", "Vehicle", "Start", "End", "Amount", "Status"]
    print(
        tabulate(
            make_rental_table(rentals, fleet.vehicles.list()),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


def cmd_maintenance(fleet: Fleet, args) -> int:
    """List maintenance records."""
    if args.vehicle:
        records = fleet.maintenance.get_for_vehicle(args.vehicle)
    else:
        records = fleet.maintenance.list()

    if not records:
        print("No maintenance records found.")
        return 0

    headers = ["ID", "Vehicle", "Type", "Description", "Cost", "Date", "Next Service", "Provider"]
    print(
        tabulate(
            make_maintenance_table(records, fleet.vehicles.list()),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


def cmd_expenditures(fleet: Fleet, args) -> int:
    """List expenditures, newest first."""
    if args.vehicle:
        expenditures = fleet.expenditures.get_for_vehicle(args.vehicle)
    else:
        expenditures = fleet.expenditures.list()
    if args.category:
        expenditures = [e for e in expenditures if text(e.category) == args.category]
    if args.since:
        expenditures = [e for e in expenditures if e.date >= args.since]
    expenditures.sort(key=lambda e: e.date, reverse=True)

    if not expenditures:
        print("No expenditures found.")
        return 0

    total = sum(e.amount for e in expenditures)
    print(f"Expenditures: {len(expenditures)}")
    print(f"Total: {format_amount(total)}")
    print()
    headers = ["ID", "Date", "Category", "Description", "Vehicle", "Amount", "Paid By"]
    print(
        tabulate(
            make_expenditure_table(expenditures, fleet.vehicles.list()),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


def cmd_report(fleet: Fleet, args) -> int:
    """Monthly rental report."""
    try:
        month = parse_month(args.month) if args.month else date.today()
    except ValueError:
        print(f"Error: Invalid month '{args.month}', expected YYYY-MM")
        return 1

    report = rental_report(
        fleet.rentals.list(),
        month,
        vehicle_id=args.vehicle,
        customer=args.customer,
        status=args.status,
    )

    print(f"Rental report: {report.month:%B %Y}")
    print(f"Total rentals: {report.total_rentals}")
    print(f"Active: {report.active_rentals}")
    print(f"Completed: {report.completed_rentals}")
    print(f"Overdue: {report.overdue_rentals}")
    print(f"Revenue: {format_amount(report.total_revenue)}")
    print()

    if not report.rentals:
        print("No rentals started in this month.")
        return 0

    headers = ["ID", "Customer", "Phone", "Vehicle", "Start", "End", "Amount", "Status"]
    print(
        tabulate(
            make_rental_table(report.rentals, fleet.vehicles.list()),
            headers=headers,
            tablefmt="simple",
        )
    )
    return 0


def cmd_export(fleet: Fleet, args) -> int:
    """Export rentals or expenditures as CSV or Word."""
    if args.collection == "rentals":
        rentals = fleet.rentals.list()
        if args.format == "csv":
            content = rentals_csv(rentals, fleet.vehicles.list())
        else:
            content = word_document("Rentals List", *rentals_table(rentals))
    else:
        expenditures = fleet.expenditures.list()
        if args.format == "csv":
            content = expenditures_csv(expenditures)
        else:
            content = word_document("Expenditures List", *expenditures_table(expenditures))

    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"Exported {args.collection} to {args.output}")
    else:
        sys.stdout.write(content)
    return 0


def cmd_return_rental(fleet: Fleet, args) -> int:
    """Mark a rental completed and free its vehicle."""
    rental = fleet.rentals.get_by_id(args.rental_id)
    if rental is None:
        print(f"Error: Unknown rental '{args.rental_id}'")
        return 1

    returned = replace(
        rental,
        status=RentalStatus.COMPLETED,
        actual_end_date=args.date or date.today().isoformat(),
    )
    print(f"Returning rental {rental.id} for {rental.customer_name}:")
    print(f"  Returned: {format_date(returned.actual_end_date)}")

    if args.dry_run:
        print(f"  Days:     {returned.days}")
        print("(dry run - no changes made)")
        return 0

    rental = fleet.rentals.update(returned)
    print(f"  Days:     {rental.days}")
    print(f"  Amount:   {format_amount(rental.total_amount)}")
    print_notices(fleet)
    return 0


def cmd_complete_maintenance(fleet: Fleet, args) -> int:
    """Finish a service and free its vehicle."""
    fleet.maintenance.complete(args.maintenance_id)
    print_notices(fleet)
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "seed": cmd_seed,
    "dashboard": cmd_dashboard,
    "vehicles": cmd_vehicles,
    "rentals": cmd_rentals,
    "maintenance": cmd_maintenance,
    "expenditures": cmd_expenditures,
    "report": cmd_report,
    "export": cmd_export,
    "return-rental": cmd_return_rental,
    "complete-maintenance": cmd_complete_maintenance,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet back office",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s seed
  %(prog)s dashboard
  %(prog)s vehicles --status available
  %(prog)s rentals --search mensah
  %(prog)s expenditures --category fuel --since 2024-01-01
  %(prog)s report --month 2024-05 --status completed
  %(prog)s export rentals --format csv -o rentals.csv
  %(prog)s return-rental r-1 --date 2024-05-10
  %(prog)s complete-maintenance m-1
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help=f"Directory holding the collection files (default: {DATA_DIR})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed", help="Load the sample fleet into an empty store")
    subparsers.add_parser("dashboard", help="Show fleet counts and this month's money")

    vehicles_parser = subparsers.add_parser("vehicles", help="List vehicles")
    vehicles_parser.add_argument(
        "--search", type=str, help="Filter by make, model or plate (case-insensitive)"
    )
    vehicles_parser.add_argument(
        "--status",
        choices=["available", "rented", "maintenance", "unavailable"],
        help="Only vehicles in this status",
    )
    vehicles_parser.add_argument(
        "--rentable",
        action="store_true",
        help="Only vehicles that can be offered for a new rental",
    )

    rentals_parser = subparsers.add_parser("rentals", help="List rentals")
    rentals_parser.add_argument(
        "--search", type=str, help="Filter by customer name, phone or email"
    )
    rentals_parser.add_argument("--vehicle", type=str, help="Only rentals of this vehicle id")
    rentals_parser.add_argument(
        "--status",
        choices=["active", "completed", "overdue", "cancelled"],
        help="Only rentals in this status",
    )

    maintenance_parser = subparsers.add_parser("maintenance", help="List maintenance records")
    maintenance_parser.add_argument("--vehicle", type=str, help="Only records for this vehicle id")

    expenditures_parser = subparsers.add_parser("expenditures", help="List expenditures")
    expenditures_parser.add_argument("--vehicle", type=str, help="Only costs of this vehicle id")
    expenditures_parser.add_argument(
        "--category",
        choices=["fuel", "maintenance", "insurance", "tax", "other"],
        help="Only this category",
    )
    expenditures_parser.add_argument(
        "--since", type=str, help="Show only expenditures since date (YYYY-MM-DD)"
    )

    report_parser = subparsers.add_parser("report", help="Monthly rental report")
    report_parser.add_argument(
        "--month", type=str, help="Month in YYYY-MM format (default: this month)"
    )
    report_parser.add_argument("--vehicle", type=str, help="Only rentals of this vehicle id")
    report_parser.add_argument("--customer", type=str, help="Filter by customer name")
    report_parser.add_argument(
        "--status",
        choices=["active", "completed", "overdue", "cancelled"],
        help="Only rentals in this status",
    )

    export_parser = subparsers.add_parser("export", help="Export a list as CSV or Word")
    export_parser.add_argument("collection", choices=["rentals", "expenditures"])
    export_parser.add_argument(
        "--format", choices=["csv", "word"], default="csv", help="Output format (default: csv)"
    )
    export_parser.add_argument(
        "-o", "--output", type=Path, help="Write to this file instead of stdout"
    )

    return_parser = subparsers.add_parser(
        "return-rental", help="Mark a rental completed and free its vehicle"
    )
    return_parser.add_argument("rental_id", type=str, help="Rental id (e.g. r-1)")
    return_parser.add_argument(
        "--date", type=str, help="Return date in YYYY-MM-DD format (default: today)"
    )
    return_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without saving",
    )

    complete_parser = subparsers.add_parser(
        "complete-maintenance", help="Finish a service and free its vehicle"
    )
    complete_parser.add_argument("maintenance_id", type=str, help="Maintenance id (e.g. m-1)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    fleet = Fleet.open(args.data_dir)

    try:
        return COMMANDS[args.command](fleet, args)
    except ValidationError as e:
        print_validation_errors(e)
        return 1
    except FleetError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
