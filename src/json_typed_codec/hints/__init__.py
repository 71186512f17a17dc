"""Hints subpackage: the type-hint model and abbreviation registry.

Re-exports the public API for the hints module:
- Hint / HintType: nested type hints with modifiers
- Abbrev / AbbrevRegistry: short registered names for hints
- ResolvedHint / resolve_hint: one-level hint resolution
- list_of, map_of, prefer_array, force_object, allow_subtype, decode_only:
  shorthand constructors
"""

from json_typed_codec.hints.abbrev import AbbrevRegistry
from json_typed_codec.hints.resolver import ResolvedHint, parse_legacy_hint, resolve_hint
from json_typed_codec.hints.types import (
    Abbrev,
    Hint,
    HintLike,
    HintType,
    allow_subtype,
    decode_only,
    force_object,
    list_of,
    map_of,
    prefer_array,
)

__all__ = [
    "Abbrev",
    "AbbrevRegistry",
    "Hint",
    "HintLike",
    "HintType",
    "ResolvedHint",
    "allow_subtype",
    "decode_only",
    "force_object",
    "list_of",
    "map_of",
    "parse_legacy_hint",
    "prefer_array",
    "resolve_hint",
]
