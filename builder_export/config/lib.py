"""Centralized environment configuration management for builder-export.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from builder_export.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> seed = get_environment(EnvVar.ELEMENTOR_ID_SEED)  # Returns int
    >>> level = get_environment(EnvVar.BUILDER_LOG_LEVEL)  # Returns str
    >>>
    >>> # Override at runtime
    >>> score = get_environment(EnvVar.SAVED_BLOCK_MIN_SCORE, override=75)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "PATTERN_MIN_SCORE").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by builder-export.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log verbosity
        - thresholds: Promotion cut-offs for library templates and template parts
        - export: Target document defaults and post-processing switches
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    BUILDER_LOG_LEVEL = EnvConfig(
        name="BUILDER_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Promotion Thresholds (reusability scores are 0-100)
    # -------------------------------------------------------------------------
    PATTERN_MIN_SCORE = EnvConfig(
        name="PATTERN_MIN_SCORE",
        default=30,
        var_type=int,
        description="Minimum library reusability score for a block pattern",
        category="thresholds",
    )
    TEMPLATE_MIN_SCORE = EnvConfig(
        name="TEMPLATE_MIN_SCORE",
        default=50,
        var_type=int,
        description="Minimum library reusability score for a saved template",
        category="thresholds",
    )
    SAVED_BLOCK_MIN_SCORE = EnvConfig(
        name="SAVED_BLOCK_MIN_SCORE",
        default=60,
        var_type=int,
        description="Minimum reusability score for reusable blocks and saved modules",
        category="thresholds",
    )
    GLOBAL_BLOCK_MIN_SCORE = EnvConfig(
        name="GLOBAL_BLOCK_MIN_SCORE",
        default=80,
        var_type=int,
        description="Minimum reusability score for a saved module to be global",
        category="thresholds",
    )
    TEMPLATE_PART_MIN_CONFIDENCE = EnvConfig(
        name="TEMPLATE_PART_MIN_CONFIDENCE",
        default=60,
        var_type=int,
        description="Minimum detection confidence for header/footer/sidebar parts",
        category="thresholds",
    )
    PATTERN_MIN_OCCURRENCES = EnvConfig(
        name="PATTERN_MIN_OCCURRENCES",
        default=2,
        var_type=int,
        description="Occurrences of a structural signature before it becomes a pattern",
        category="thresholds",
    )

    # -------------------------------------------------------------------------
    # Export Defaults
    # -------------------------------------------------------------------------
    ELEMENTOR_VERSION = EnvConfig(
        name="ELEMENTOR_VERSION",
        default="3.16.0",
        var_type=str,
        description="Elementor document version stamped on exports",
        category="export",
    )
    ELEMENTOR_ID_SEED = EnvConfig(
        name="ELEMENTOR_ID_SEED",
        default=1000,
        var_type=int,
        description="First value of the Elementor element id counter",
        category="export",
    )
    EXPORT_VALIDATE = EnvConfig(
        name="EXPORT_VALIDATE",
        default=True,
        var_type=bool,
        description="Run structural validation after every export",
        category="export",
    )
    EXPORT_OPTIMIZE = EnvConfig(
        name="EXPORT_OPTIMIZE",
        default=True,
        var_type=bool,
        description="Strip empty values and duplicate registry entries after export",
        category="export",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or bool).

    Example:
        >>> get_environment(EnvVar.PATTERN_MIN_SCORE)
        30
        >>> get_environment(EnvVar.PATTERN_MIN_SCORE, override=45)
        45
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, thresholds, export).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


# =============================================================================
# Convenience Functions
# =============================================================================


@dataclass(frozen=True)
class ExportThresholds:
    """Promotion cut-offs used when turning analysis output into saved content.

    Attributes:
        pattern_min_score: Library score needed for a Gutenberg pattern.
        template_min_score: Library score needed for a saved template.
        saved_block_min_score: Library score needed for a reusable block
            or Beaver Builder saved module.
        global_block_min_score: Library score at which a saved module is global.
        template_part_min_confidence: Detection confidence needed for
            header/footer/sidebar export.
        pattern_min_occurrences: Repeats of a structural signature before it
            is promoted to a pattern or reusable block.
    """

    pattern_min_score: int = 30
    template_min_score: int = 50
    saved_block_min_score: int = 60
    global_block_min_score: int = 80
    template_part_min_confidence: int = 60
    pattern_min_occurrences: int = 2


def get_thresholds(**overrides: int) -> ExportThresholds:
    """Build ExportThresholds from the environment.

    Resolution per field: keyword override > environment > default.

    Args:
        **overrides: Field values to force, keyed by ExportThresholds field name.

    Returns:
        Frozen ExportThresholds.

    Raises:
        TypeError: If an override names an unknown field.
    """
    fields = {
        "pattern_min_score": EnvVar.PATTERN_MIN_SCORE,
        "template_min_score": EnvVar.TEMPLATE_MIN_SCORE,
        "saved_block_min_score": EnvVar.SAVED_BLOCK_MIN_SCORE,
        "global_block_min_score": EnvVar.GLOBAL_BLOCK_MIN_SCORE,
        "template_part_min_confidence": EnvVar.TEMPLATE_PART_MIN_CONFIDENCE,
        "pattern_min_occurrences": EnvVar.PATTERN_MIN_OCCURRENCES,
    }
    unknown = set(overrides) - set(fields)
    if unknown:
        raise TypeError(f"Unknown threshold(s): {', '.join(sorted(unknown))}")

    return ExportThresholds(
        **{
            name: get_environment(var, override=overrides.get(name))
            for name, var in fields.items()
        }
    )


def get_log_level(override: str | None = None) -> int:
    """Resolve BUILDER_LOG_LEVEL to a logging level number.

    Unknown level names fall back to INFO.
    """
    name = str(get_environment(EnvVar.BUILDER_LOG_LEVEL, override=override))
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    "ExportThresholds",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_thresholds",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
