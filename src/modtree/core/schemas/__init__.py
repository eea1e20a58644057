"""
Schemas Package

JSON schema definitions and validation utilities for tree exports.
"""

from .validator import (
    validate_tree_export,
    ValidationError,
    TREE_EXPORT_SCHEMA_VERSION,
)

__all__ = [
    "validate_tree_export",
    "ValidationError",
    "TREE_EXPORT_SCHEMA_VERSION",
]
