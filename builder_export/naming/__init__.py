"""Shared per-target naming tables."""

from builder_export.naming.lib import (
    BEAVER_BUILDER,
    ELEMENTOR,
    ENTRANCE_ANIMATIONS,
    GUTENBERG,
    OXYGEN,
    VOCABULARIES,
    RuleKind,
    TargetVocabulary,
    TypeRule,
    get_vocabulary,
    match_type_rules,
)

__all__ = [
    "RuleKind",
    "TypeRule",
    "TargetVocabulary",
    "match_type_rules",
    "get_vocabulary",
    "VOCABULARIES",
    "ENTRANCE_ANIMATIONS",
    "ELEMENTOR",
    "GUTENBERG",
    "OXYGEN",
    "BEAVER_BUILDER",
]
