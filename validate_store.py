#!/usr/bin/env python3
"""Validate the collection files of a data directory against the schema."""
import argparse
import sys
from pathlib import Path
from typing import Dict, List

from fleetdesk.config import DATA_DIR, EXPENDITURES, MAINTENANCE, RENTALS, VEHICLES
from fleetdesk.errors import StorageError
from fleetdesk.loader import (
    parse_expenditure,
    parse_maintenance,
    parse_rental,
    parse_vehicle,
    record_to_dict,
)
from fleetdesk.store import YamlStore
from fleetdesk.validation import validate_record

# Collection key -> (schema kind, parser)
KINDS = {
    VEHICLES: ("vehicle", parse_vehicle),
    RENTALS: ("rental", parse_rental),
    MAINTENANCE: ("maintenance", parse_maintenance),
    EXPENDITURES: ("expenditure", parse_expenditure),
}


def validate_collection(store: YamlStore, key: str) -> List[str]:
    """Validate one collection file. Returns list of errors."""
    kind, parse = KINDS[key]
    try:
        items = store.read(key)
    except StorageError as e:
        return [f"Storage error: {e}"]

    errors = []
    seen_ids = set()
    for index, item in enumerate(items):
        try:
            data = record_to_dict(parse(item))
        except (TypeError, ValueError) as e:
            errors.append(f"[{index}] Could not parse record: {e}")
            continue
        label = data.get("id") or f"[{index}]"
        for field, message in sorted(validate_record(kind, data, stored=True).items()):
            errors.append(f"{label} {field}: {message}")
        if "id" in data:
            if data["id"] in seen_ids:
                errors.append(f"{label} id: Duplicate id")
            seen_ids.add(data["id"])
    return errors


def validate_store(data_dir: Path) -> Dict[str, List[str]]:
    """Validate every collection present in data_dir, keyed by file name."""
    store = YamlStore(data_dir)
    return {
        store.path_for(key).name: validate_collection(store, key)
        for key in KINDS
        if store.path_for(key).exists()
    }


def main(argv=None):
    """Validate all collection files in the data directory."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "data_dir",
        nargs="?",
        type=Path,
        default=DATA_DIR,
        help=f"Directory holding the collection files (default: {DATA_DIR})",
    )
    args = parser.parse_args(argv)

    if not args.data_dir.exists():
        print(f"Error: data directory not found: {args.data_dir}")
        return 1

    results = validate_store(args.data_dir)
    if not results:
        print(f"Warning: No collection files found in {args.data_dir}")
        return 0

    all_valid = True
    for name, errors in results.items():
        if errors:
            print(f"FAIL: {name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
