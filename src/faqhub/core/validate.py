"""Schema validation of enhanced items with a JSON Lines diagnostics log"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from faqhub.core.models import InvalidItem, ValidationOutcome


logger = logging.getLogger(__name__)

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


class ValidationLog:
    """Per-build diagnostics file: cleared once at build start, then appended to."""

    def __init__(self, path: Path):
        self.path = path

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clear validation log %s: %s", self.path, e)

    def append(self, records: list[dict[str, Any]]) -> None:
        if not records:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as fh:
                for record in records:
                    fh.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
        except OSError as e:
            logger.warning("Failed to write validation log %s: %s", self.path, e)


def load_validators(schema_dir: Path = SCHEMAS_DIR) -> dict[str, Draft202012Validator]:
    """Compile every <name>.json schema in schema_dir. Broken schemas are logged and skipped."""
    if not schema_dir.is_dir():
        logger.warning("Schema directory does not exist: %s", schema_dir)
        return {}

    validators = {}
    for path in sorted(schema_dir.glob("*.json")):
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
            Draft202012Validator.check_schema(schema)
        except (OSError, ValueError, SchemaError) as e:
            logger.error("Could not load schema %s: %s", path.stem, e)
            continue
        validators[path.stem] = Draft202012Validator(
            schema, format_checker=Draft202012Validator.FORMAT_CHECKER
        )
    return validators


def _describe(item: dict[str, Any], index: int) -> str:
    return item.get("filename") or item.get("title") or f"item {index}"


class SchemaValidator:
    """Validate item batches against named schemas, collecting every error."""

    def __init__(self, validators: dict[str, Draft202012Validator], log: Optional[ValidationLog] = None):
        self.validators = validators
        self.log = log

    def item_errors(self, item: dict[str, Any], schema_name: Optional[str]) -> list[dict[str, Any]]:
        """All errors for one item as {path, message, value}; [] when no schema applies."""
        validator = self.validators.get(schema_name) if schema_name else None
        if validator is None:
            return []
        return [
            {
                "path": "/" + "/".join(str(p) for p in error.absolute_path),
                "message": error.message,
                # required/additional errors point at the whole item
                "value": None if isinstance(error.instance, dict) else error.instance,
            }
            for error in sorted(validator.iter_errors(item), key=lambda e: list(map(str, e.absolute_path)))
        ]

    def validate(self, items: list[dict[str, Any]], schema_name: Optional[str], context: str = "") -> ValidationOutcome:
        """Partition items into valid and invalid; invalid detail goes to the log only."""
        if not schema_name or schema_name not in self.validators:
            logger.warning("No validator found for schema type: %s", schema_name)
            return ValidationOutcome(valid_items=list(items))

        outcome = ValidationOutcome()
        records = []
        timestamp = datetime.now(timezone.utc).isoformat()
        for index, item in enumerate(items):
            errors = self.item_errors(item, schema_name)
            if not errors:
                outcome.valid_items.append(item)
                continue
            outcome.invalid_items.append(InvalidItem(item=item, errors=errors, index=index))
            records.extend(
                {
                    "timestamp": timestamp,
                    "schema": schema_name,
                    "context": f"{context}[{index}]",
                    "item": _describe(item, index),
                    **error,
                }
                for error in errors
            )

        if self.log is not None:
            self.log.append(records)
        if outcome.invalid_items:
            logger.warning(
                "Excluded %d invalid %s items (%d errors); see validation log",
                len(outcome.invalid_items), schema_name, len(records),
            )
        if outcome.valid_items:
            logger.info("%d valid %s items included", len(outcome.valid_items), schema_name)
        return outcome
