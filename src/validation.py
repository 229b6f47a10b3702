"""Schema validation for request payloads and generation responses."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def _load_schema(name: str) -> dict:
    path = SCHEMAS_DIR / f"{name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def validate_generation_response(data: dict) -> None:
    """Validate {"result": str} from the generation service. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("generation_response")
    jsonschema.validate(data, schema)


def validate_draft_fields(data: dict) -> None:
    """Validate a (partial) draft fields update. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("draft_fields")
    jsonschema.validate(data, schema)


def validate_draft_text(data: dict) -> None:
    """Validate a draft edit payload. Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("draft_text")
    jsonschema.validate(data, schema)


def validate_generate_request(data: dict) -> None:
    """Validate the generate request body (field updates are checked separately). Raises jsonschema.ValidationError if invalid."""
    schema = _load_schema("generate_request")
    jsonschema.validate(data, schema)
