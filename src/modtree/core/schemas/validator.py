"""
Schema Validation Utilities

Validates tree export dictionaries against the bundled JSON Schema.

The export is a display snapshot of the BST (nested nodes, each carrying
its group and the group's direct members). Consumers that render or diff
trees call ``validate_tree_export()`` before trusting the structure.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any

import jsonschema

from ...errors import TreeError


# Bump together with the "const" of schema_version in tree_export.schema.json
TREE_EXPORT_SCHEMA_VERSION = 1


@lru_cache(maxsize=None)
def _export_validator(name: str) -> jsonschema.Draft202012Validator:
    """Build (once per schema name) a validator for a bundled schema file."""
    resource = resources.files(__package__).joinpath(f"{name}.schema.json")
    if not resource.is_file():
        raise FileNotFoundError(f"Bundled schema missing: {name}.schema.json")
    schema = json.loads(resource.read_text(encoding="utf-8"))
    jsonschema.Draft202012Validator.check_schema(schema)
    return jsonschema.Draft202012Validator(schema)


class ValidationError(TreeError):
    """Raised when an export fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_tree_export(data: dict[str, Any]) -> None:
    """
    Validate a tree export against the schema.

    Args:
        data: Dictionary produced by ``ModificationTree.export()``

    Raises:
        ValidationError: If data is invalid. ``path`` points at the first
            failing location, ``errors`` lists every schema message.
    """
    if not isinstance(data, dict):
        raise ValidationError("Tree export must be a dict", path="")

    version = data.get("schema_version")
    if version != TREE_EXPORT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported tree export schema version: {version} (expected {TREE_EXPORT_SCHEMA_VERSION})",
            path="schema_version",
        )

    errors = list(_export_validator("tree_export").iter_errors(data))
    if errors:
        first = jsonschema.exceptions.best_match(errors)
        raise ValidationError(
            f"Schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )
