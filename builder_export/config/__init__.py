"""Centralized configuration management for builder-export.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from builder_export.config import EnvVar, get_environment, get_thresholds
    >>>
    >>> # Get any environment variable with automatic type conversion
    >>> version = get_environment(EnvVar.ELEMENTOR_VERSION)  # Returns str: "3.16.0"
    >>>
    >>> # Promotion thresholds, with per-call overrides
    >>> thresholds = get_thresholds(saved_block_min_score=70)
    >>>
    >>> # List available variables by category
    >>> for var in list_environment_variables("thresholds"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Log verbosity
    thresholds: Reusability and confidence cut-offs
    export: Document defaults and post-processing switches
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    ExportThresholds,
    # Main interface
    get_environment,
    get_environment_info,
    # Convenience functions
    get_log_level,
    get_thresholds,
    # Introspection
    list_environment_variables,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "ExportThresholds",
    "get_environment",
    "get_environment_info",
    "get_log_level",
    "get_thresholds",
    "list_environment_variables",
]
