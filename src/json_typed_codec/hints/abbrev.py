"""AbbrevRegistry: bidirectional map between abbreviation names and hints.

Abbreviations shrink type markers on the wire: once ``"so"`` is registered
for ``SampleObject``, encoded objects carry ``"_type_": "@so"`` instead of
the full ``"module:SampleObject"`` identifier.

Two maps are kept:

- name -> Abbrev, used when decoding ``@name`` tags and when an ``Abbrev``
  is passed as a hint.
- class -> Abbrev, used when encoding.  Only *encode-capable* abbreviations
  (whose hint is a bare class) populate it, and each class may have at most
  one.  Any number of DECODE_ONLY abbreviations may point at the same class,
  which lets a renamed abbreviation keep decoding old documents.

Entries are never removed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from json_typed_codec.errors import ConflictingAbbreviationError, InvalidAbbreviationError
from json_typed_codec.hints.resolver import parse_legacy_hint
from json_typed_codec.hints.types import Abbrev, Hint, HintLike, HintType, describe

if TYPE_CHECKING:
    from json_typed_codec.registry import TypeRegistry

__all__ = ["AbbrevRegistry"]

logger = logging.getLogger(__name__)


class AbbrevRegistry:
    """Registry of abbreviations for one ``JsonCodec``.

    Args:
        types: Registry used to resolve type identifier strings in hints.
    """

    def __init__(self, types: TypeRegistry) -> None:
        self._types = types
        self._by_name: dict[str, Abbrev] = {}
        self._by_type: dict[type, Abbrev] = {}

    def __len__(self) -> int:
        return len(self._by_name)

    def register(self, name: str, hint: HintLike) -> Abbrev:
        """Register ``name`` as an abbreviation for ``hint``.

        Registering the same name for an equivalent hint again is a no-op
        that returns the existing ``Abbrev``.

        Args:
            name: Abbreviation name, without the wire prefix.
            hint: The hint it stands for.

        Returns:
            The registered ``Abbrev``.

        Raises:
            ConflictingAbbreviationError: If ``name`` is registered for a
                different hint, or ``hint`` is a class that already has an
                encode-capable abbreviation.
            ValueError: If ``name`` is empty.
        """
        if not name:
            msg = "Abbreviation name must be a non-empty string"
            raise ValueError(msg)
        abbrev = Abbrev(name, self._normalize(hint))

        existing = self._by_name.get(name)
        if existing is not None:
            if existing.is_same_as(abbrev):
                return existing
            msg = f"Abbreviation {name!r} already registered as {existing}, not {abbrev}"
            raise ConflictingAbbreviationError(msg)

        concrete = self._encode_type(abbrev.hint)
        if concrete is not None:
            other = self._by_type.get(concrete)
            if other is not None:
                msg = f"Type {describe(concrete)} already abbreviated as {other}"
                raise ConflictingAbbreviationError(msg)
            self._by_type[concrete] = abbrev

        self._by_name[name] = abbrev
        logger.debug("Registered abbreviation %s", abbrev)
        return abbrev

    def lookup(self, name: str) -> Abbrev | None:
        """Return the abbreviation registered under ``name``, if any."""
        return self._by_name.get(name)

    def for_type(self, cls: type) -> Abbrev | None:
        """Return the encode-capable abbreviation for ``cls``, if any."""
        return self._by_type.get(cls)

    def resolve_tag(self, name: str) -> type:
        """Resolve a decoded ``@name`` tag to the class it abbreviates.

        DEFAULT and DECODE_ONLY wrappers are peeled; what remains must be a
        concrete class.

        Raises:
            InvalidAbbreviationError: If ``name`` is unregistered or does not
                resolve to a concrete class.
        """
        abbrev = self._by_name.get(name)
        if abbrev is None:
            msg = f"Unknown abbreviation {name!r}"
            raise InvalidAbbreviationError(msg)
        hint = abbrev.hint
        while isinstance(hint, Hint) and hint.modifier in (
            HintType.DEFAULT,
            HintType.DECODE_ONLY,
        ):
            hint = hint.parent
        if not isinstance(hint, type):
            msg = f"Abbreviation {abbrev} does not name a concrete type"
            raise InvalidAbbreviationError(msg)
        return hint

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _normalize(self, hint: HintLike) -> HintLike:
        """Replace plain type identifier strings with the classes they name."""
        if isinstance(hint, Hint):
            return Hint(self._normalize(hint.parent), hint.modifier)
        if isinstance(hint, str):
            parsed = parse_legacy_hint(hint)
            if isinstance(parsed, Hint):
                return self._normalize(parsed)
            cls = self._types.resolve(parsed)
            return cls if cls is not None else parsed
        return hint

    @staticmethod
    def _encode_type(hint: HintLike) -> type | None:
        while isinstance(hint, Hint) and hint.modifier is HintType.DEFAULT:
            hint = hint.parent
        return hint if isinstance(hint, type) else None
