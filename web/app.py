"""Flask JSON API for the fleet back office."""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from flask import Flask, Response, abort, jsonify, request

from fleetdesk import Fleet, RentalStatus
from fleetdesk.calculations import suggest_next_service_date
from fleetdesk.config import COLLECTIONS, DATA_DIR, VEHICLES
from fleetdesk.errors import ConflictError, NotFoundError, ValidationError
from fleetdesk.formatting import text
from fleetdesk.loader import camel, record_to_dict
from fleetdesk.logger import get_logger
from fleetdesk.reports import (
    expenditures_csv,
    expenditures_table,
    parse_month,
    rental_agreement_csv,
    rental_report,
    rentals_csv,
    rentals_table,
    word_document,
)
from fleetdesk.store import YamlStore

logger = get_logger(__name__)

# Set by the repositories, never taken from a request body
READ_ONLY_FIELDS = ("dateAdded", "dateCreated", "lastUpdated", "totalAmount")


def json_body() -> dict:
    """Request body as a dict; 400 for anything else."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object")
    return {k: v for k, v in payload.items() if k not in READ_ONLY_FIELDS}


def notices_json(fleet: Fleet) -> list:
    return [
        {"title": n.title, "description": n.description, "variant": n.variant}
        for n in fleet.notifier.drain()
    ]


def register_collection(app: Flask, fleet: Fleet, name: str) -> None:
    """Add list/create/get/update/delete routes for one collection."""
    repo = getattr(fleet, name)

    def list_records():
        term = request.args.get("search")
        records = repo.search(term) if term else repo.list()
        vehicle_id = request.args.get("vehicleId")
        if vehicle_id:
            records = [r for r in records if r.vehicle_id == vehicle_id]
        status = request.args.get("status")
        if status:
            records = [r for r in records if text(getattr(r, "status", None)) == status]
        return jsonify([record_to_dict(r) for r in records])

    def create_record():
        payload = json_body()
        payload.pop("id", None)
        record = repo.add(repo.parse(payload))
        return jsonify({"record": record_to_dict(record), "notices": notices_json(fleet)}), 201

    def get_record(record_id: str):
        record = repo.get_by_id(record_id)
        if record is None:
            raise NotFoundError(f"{repo.label} not found")
        return jsonify(record_to_dict(record))

    def update_record(record_id: str):
        existing = repo.get_by_id(record_id)
        data = record_to_dict(existing) if existing else {}
        data.update(json_body())
        data["id"] = record_id
        record = repo.update(repo.parse(data))
        return jsonify({"record": record_to_dict(record), "notices": notices_json(fleet)})

    def delete_record(record_id: str):
        repo.delete(record_id)
        return jsonify({"notices": notices_json(fleet)})

    app.add_url_rule(f"/api/{name}", f"list_{name}", list_records, methods=["GET"])
    app.add_url_rule(f"/api/{name}", f"create_{name}", create_record, methods=["POST"])
    app.add_url_rule(f"/api/{name}/<record_id>", f"get_{name}", get_record, methods=["GET"])
    app.add_url_rule(
        f"/api/{name}/<record_id>", f"update_{name}", update_record, methods=["PUT"]
    )
    app.add_url_rule(
        f"/api/{name}/<record_id>", f"delete_{name}", delete_record, methods=["DELETE"]
    )


def create_app(data_dir: Optional[Union[str, Path]] = None, store=None) -> Flask:
    """
    Build the app around one Fleet.

    Args:
        data_dir: Directory for the YAML collection files (default: DATA_DIR)
        store: Use this store instead of YAML files, e.g. a MemoryStore in tests
    """
    app = Flask(__name__)
    fleet = Fleet(store if store is not None else YamlStore(data_dir or DATA_DIR))
    if fleet.ensure_seeded():
        logger.info("Loaded sample data")
    fleet.notifier.drain()
    app.extensions["fleet"] = fleet

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        body = {"errors": e.errors, "message": e.args[0], "notices": notices_json(fleet)}
        return jsonify(body), 422

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"errors": {"record": str(e)}, "notices": notices_json(fleet)}), 404

    @app.errorhandler(ConflictError)
    def handle_conflict(e: ConflictError):
        return jsonify({"errors": {"record": str(e)}, "notices": notices_json(fleet)}), 409

    @app.errorhandler(400)
    def handle_bad_request(e):
        return jsonify({"errors": {"record": e.description}}), 400

    @app.route("/api/vehicles/rentable")
    def rentable_vehicles():
        """Vehicles a rental form may offer; ?current= keeps the rental's own."""
        vehicles = fleet.vehicles.rentable(request.args.get("current"))
        return jsonify([record_to_dict(v) for v in vehicles])

    @app.route("/api/maintenance/next-service")
    def next_service():
        """Suggested next service date for a type and service date."""
        service_date = request.args.get("serviceDate") or date.today().isoformat()
        try:
            suggested = suggest_next_service_date(
                request.args.get("type", "routine"), service_date
            )
        except ValueError:
            abort(400, description="serviceDate must be an ISO date (YYYY-MM-DD)")
        return jsonify({"nextServiceDate": suggested})

    for name in COLLECTIONS:
        register_collection(app, fleet, name)

    @app.route("/api/vehicles/<vehicle_id>/<collection>")
    def vehicle_records(vehicle_id: str, collection: str):
        """Rentals, maintenance or expenditures of one vehicle."""
        if collection == VEHICLES or collection not in COLLECTIONS:
            abort(404)
        repo = getattr(fleet, collection)
        return jsonify([record_to_dict(r) for r in repo.get_for_vehicle(vehicle_id)])

    @app.route("/api/rentals/<rental_id>/return", methods=["POST"])
    def return_rental(rental_id: str):
        """Complete a rental; the vehicle becomes available again."""
        rental = fleet.rentals.get_by_id(rental_id)
        if rental is None:
            raise NotFoundError("Rental not found")
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        data = record_to_dict(rental)
        data["status"] = RentalStatus.COMPLETED.value
        data["actualEndDate"] = payload.get("actualEndDate") or date.today().isoformat()
        rental = fleet.rentals.update(fleet.rentals.parse(data))
        return jsonify({"record": record_to_dict(rental), "notices": notices_json(fleet)})

    @app.route("/api/rentals/<rental_id>/agreement.csv")
    def rental_agreement(rental_id: str):
        rental = fleet.rentals.get_by_id(rental_id)
        if rental is None:
            raise NotFoundError("Rental not found")
        content = rental_agreement_csv(rental, fleet.vehicles.get_by_id(rental.vehicle_id))
        return csv_response(content, f"rental-agreement-{rental_id}.csv")

    @app.route("/api/maintenance/<maintenance_id>/complete", methods=["POST"])
    def complete_maintenance(maintenance_id: str):
        fleet.maintenance.complete(maintenance_id)
        return jsonify({"notices": notices_json(fleet)})

    @app.route("/api/dashboard")
    def dashboard():
        stats = fleet.compute_dashboard_stats()
        body = stats.to_dict()
        body[camel("monthly_profit")] = stats.monthly_profit
        return jsonify(body)

    @app.route("/api/reports/rentals")
    def rentals_report():
        """Monthly rental report: ?month=YYYY-MM&vehicleId=&customer=&status="""
        month_arg = request.args.get("month")
        try:
            month = parse_month(month_arg) if month_arg else date.today()
        except ValueError:
            abort(400, description="month must be in YYYY-MM format")
        report = rental_report(
            fleet.rentals.list(),
            month,
            vehicle_id=request.args.get("vehicleId"),
            customer=request.args.get("customer"),
            status=request.args.get("status"),
        )
        return jsonify(
            {
                "month": report.month.strftime("%Y-%m"),
                "totalRentals": report.total_rentals,
                "activeRentals": report.active_rentals,
                "completedRentals": report.completed_rentals,
                "overdueRentals": report.overdue_rentals,
                "totalRevenue": report.total_revenue,
                "rentals": [record_to_dict(r) for r in report.rentals],
            }
        )

    @app.route("/api/export/<collection>")
    def export(collection: str):
        """CSV (default) or Word export: ?format=csv|word"""
        fmt = request.args.get("format", "csv")
        if collection not in ("rentals", "expenditures") or fmt not in ("csv", "word"):
            abort(404)
        if collection == "rentals":
            rentals = fleet.rentals.list()
            if fmt == "csv":
                return csv_response(rentals_csv(rentals, fleet.vehicles.list()), "rentals.csv")
            return word_response(word_document("Rentals List", *rentals_table(rentals)), "rentals.doc")
        expenditures = fleet.expenditures.list()
        if fmt == "csv":
            return csv_response(expenditures_csv(expenditures), "expenditures.csv")
        return word_response(
            word_document("Expenditures List", *expenditures_table(expenditures)),
            "expenditures.doc",
        )

    return app


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def word_response(content: str, filename: str) -> Response:
    return Response(
        content,
        mimetype="application/msword",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    create_app().run(debug=True, host="0.0.0.0", port=5001)
