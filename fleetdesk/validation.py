"""Record validation against the schema in schema.yaml."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import Draft7Validator

from .loader import snake

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

# Fields every persisted record carries, by kind
STORED_FIELDS = {
    "vehicle": ["id", "dateAdded", "lastUpdated"],
    "rental": ["id", "dateCreated", "lastUpdated"],
    "maintenance": ["id", "dateCreated", "lastUpdated"],
    "expenditure": ["id", "dateCreated", "lastUpdated"],
}


@lru_cache(maxsize=None)
def load_schema() -> dict:
    """Load the record schemas from schema.yaml."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _validator(kind: str, stored: bool) -> Draft7Validator:
    schema = load_schema()[kind]
    if stored:
        schema = dict(schema, required=schema["required"] + STORED_FIELDS[kind])
    return Draft7Validator(schema)


def _describe(error, prop: Dict[str, Any]) -> str:
    """Turn a jsonschema error on a single property into a message."""
    title = prop.get("title", "Value")
    if error.validator == "minLength":
        return prop.get("x-required", f"{title} is required")
    if error.validator == "enum":
        return f"{title} must be one of: {', '.join(error.validator_value)}"
    if error.validator == "type":
        return f"{title} must be of type {error.validator_value}"
    if error.validator == "minimum":
        return f"{title} cannot be less than {error.validator_value}"
    if error.validator == "exclusiveMinimum":
        return f"{title} must be greater than {error.validator_value}"
    if error.validator == "pattern":
        return f"{title} must be an ISO date (YYYY-MM-DD)"
    return error.message


def validate_record(kind: str, data: Dict[str, Any], stored: bool = False) -> Dict[str, str]:
    """
    Validate a record dict (camelCase keys, None values omitted).

    Returns a mapping of snake_case field name to message; empty when
    the record is valid. Only the first problem per field is reported.

    Args:
        kind: "vehicle", "rental", "maintenance" or "expenditure"
        stored: If True, also require the id and timestamp fields
    """
    properties = load_schema()[kind]["properties"]
    errors: Dict[str, str] = {}
    for error in _validator(kind, stored).iter_errors(data):
        if error.validator == "required":
            # One error per missing property; recompute the names from the instance
            for name in error.validator_value:
                if name not in error.instance:
                    prop = properties.get(name, {})
                    message = prop.get("x-required", f"{prop.get('title', name)} is required")
                    errors.setdefault(snake(name), message)
        elif error.path:
            name = str(error.path[0])
            errors.setdefault(snake(name), _describe(error, properties.get(name, {})))
        else:
            errors.setdefault("record", error.message)
    return errors
