"""Export validation and optimization.

This module checks generated page-builder documents for structural issues
before they are handed to WordPress, and strips empty values so the
serialized output stays small.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from builder_export.core.log import get_logger

logger = get_logger(__name__)

# Keys holding per-node configuration rather than structure
SETTINGS_KEYS = frozenset({"settings", "attrs", "options", "page_settings"})

# Keys identifying a structural node
NODE_ID_KEYS = ("id", "node")

# List-valued registries de-duplicated by optimize_export
REGISTRY_KEYS = ("saved_modules", "reusable_blocks", "patterns", "templates")


@dataclass
class ValidationIssue:
    """A single problem found in an export.

    Attributes:
        path: Location of the problem (dotted keys/indexes, or a node id).
        message: Human-readable description.
        issue_type: Category of the issue.
    """

    path: str
    message: str
    issue_type: str


@dataclass
class ValidationReport:
    """Outcome of validating one export document."""

    is_valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        """Check if any warnings were recorded."""
        return len(self.warnings) > 0


def _iter_node_ids(value: Any) -> Iterator[Any]:
    """Yield the id of every structural node, skipping settings payloads."""
    if isinstance(value, dict):
        for key in NODE_ID_KEYS:
            node_id = value.get(key)
            if isinstance(node_id, (str, int)) and not isinstance(node_id, bool):
                yield node_id
                break
        for key, child in value.items():
            if key not in SETTINGS_KEYS:
                yield from _iter_node_ids(child)
    elif isinstance(value, list):
        for item in value:
            yield from _iter_node_ids(item)


def _is_empty_content(content: Any) -> bool:
    return content is None or (isinstance(content, (list, dict)) and not content)


def validate_export(
    document: dict | None,
    *,
    model: type[BaseModel] | None = None,
    content_key: str | None = None,
    registered_ids: Iterable[str] = (),
) -> ValidationReport:
    """Validate an export document.

    Performs the following checks:
        - The document exists
        - The content is not empty (warning)
        - No structural node id appears twice
        - The document fits the target's document model
        - Every registered global id is referenced by the content (warning)

    Never raises: every failure is recorded on the report.

    Args:
        document: Target document to check.
        model: Pydantic model describing the target's document.
        content_key: Key of the node content inside the document.
        registered_ids: Global color/font ids the exporter registered.

    Returns:
        ValidationReport with errors and warnings.

    Example:
        >>> report = validate_export({"content": []}, content_key="content")
        >>> report.is_valid, len(report.warnings)
        (True, 1)
    """
    report = ValidationReport()

    if document is None:
        report.errors.append(
            ValidationIssue("", "Export produced no document", "missing_document")
        )
        report.is_valid = False
        logger.warning("Export validation failed: no document")
        return report

    content = document.get(content_key) if content_key else document
    if _is_empty_content(content):
        report.warnings.append(
            ValidationIssue(content_key or "", "Export has no content", "empty_content")
        )

    # Duplicate ids
    counts: dict[Any, int] = {}
    for node_id in _iter_node_ids(content):
        counts[node_id] = counts.get(node_id, 0) + 1
    for node_id, count in counts.items():
        if count > 1:
            report.errors.append(
                ValidationIssue(
                    str(node_id),
                    f"Duplicate ID '{node_id}' appears {count} times",
                    "duplicate_id",
                )
            )

    # Document model
    if model is not None:
        try:
            model.model_validate(document)
        except ValidationError as exc:
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"])
                report.errors.append(
                    ValidationIssue(location, error["msg"], "schema")
                )

    # Unreferenced globals
    serialized = json.dumps(content, default=str) if content is not None else ""
    for registered_id in registered_ids:
        if str(registered_id) not in serialized:
            report.warnings.append(
                ValidationIssue(
                    str(registered_id),
                    f"Global '{registered_id}' is registered but never referenced",
                    "unreferenced_global",
                )
            )

    report.is_valid = not report.errors
    if report.errors:
        logger.warning(
            "Export validation failed with %d error(s)", len(report.errors)
        )
        for issue in report.errors:
            logger.warning("  %s: %s", issue.path or "<document>", issue.message)
    return report


# =============================================================================
# Optimization
# =============================================================================


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (dict, list)) and not value)


def _prune(value: Any) -> Any:
    """Drop None, empty strings and empty containers, children first."""
    if isinstance(value, dict):
        pruned = {key: _prune(item) for key, item in value.items()}
        return {key: item for key, item in pruned.items() if not _is_blank(item)}
    if isinstance(value, list):
        pruned = [_prune(item) for item in value]
        return [item for item in pruned if not _is_blank(item)]
    return value


def _dedupe(items: list) -> list:
    seen: set[str] = set()
    unique = []
    for item in items:
        key = json.dumps(item, sort_keys=True, default=str)
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def optimize_export(document: dict) -> dict:
    """Return a compacted copy of an export document.

    Empty values are removed bottom-up, so a container whose members were
    all empty disappears too. Identical entries in list-valued registries
    (saved modules, reusable blocks, patterns, templates) are collapsed to
    their first occurrence. Applying it twice gives the same result as
    applying it once.

    Args:
        document: Export document. Not modified.

    Returns:
        The optimized document.
    """
    optimized = _prune(document)
    for key in REGISTRY_KEYS:
        if isinstance(optimized.get(key), list):
            optimized[key] = _dedupe(optimized[key])
    return optimized
