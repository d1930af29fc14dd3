"""Runtime configuration, read from the environment."""

import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("FLEETDESK_DATA_DIR", Path.home() / ".fleetdesk"))
LOG_LEVEL = os.environ.get("FLEETDESK_LOG_LEVEL", "INFO").upper()
CURRENCY = os.environ.get("FLEETDESK_CURRENCY", "₵")

# Collection keys; each also names the Fleet attribute holding its repository
VEHICLES = "vehicles"
RENTALS = "rentals"
MAINTENANCE = "maintenance"
EXPENDITURES = "expenditures"
COLLECTIONS = (VEHICLES, RENTALS, MAINTENANCE, EXPENDITURES)

# Maintenance due within this many days counts as upcoming (no lower bound)
UPCOMING_MAINTENANCE_DAYS = 7

# Default gap to the next service, by maintenance type
NEXT_SERVICE_MONTHS = {
    "routine": 3,
    "repair": 6,
    "inspection": 12,
}
