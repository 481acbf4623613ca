"""Export validation and optimization."""

from builder_export.validation.lib import (
    ValidationIssue,
    ValidationReport,
    optimize_export,
    validate_export,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "validate_export",
    "optimize_export",
]
