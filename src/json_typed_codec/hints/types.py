"""Hint and Abbrev dataclasses plus the HintType StrEnum.

A hint tells the codec what type to expect at some position in the tree so
the type marker can be left out of the JSON.  Hints nest: the modifier of
the outermost ``Hint`` applies first, and its ``parent`` is the hint for
the thing the modifier wraps.  ``list_of(map_of(Foo))`` is a list whose
elements are maps of ``Foo`` values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TypeAlias

__all__ = [
    "Abbrev",
    "Hint",
    "HintLike",
    "HintType",
    "allow_subtype",
    "decode_only",
    "describe",
    "force_object",
    "list_of",
    "map_of",
    "prefer_array",
]


class HintType(StrEnum):
    """Modifier applied by a ``Hint`` to its parent.

    - DEFAULT:       Exact match for the parent type.  Typed objects are
                     always written with braces, so a list-shaped record
                     still carries an (empty) type marker.
    - LIST:          A list whose elements each carry the parent hint.
    - MAP:           A dict whose values each carry the parent hint.
    - PREFER_ARRAY:  Write a list-shaped record with brackets when no type
                     marker is needed.  Not compatible with FORCE_OBJECT.
    - FORCE_OBJECT:  Write a list-shaped record with braces and no marker.
                     Not compatible with PREFER_ARRAY.
    - ALLOW_SUBTYPE: The value is an instance of the parent type or one of
                     its subclasses; the parent type's codec handles it.
    - DECODE_ONLY:   Use the parent hint when decoding only.  Encoding
                     still records full type information, which keeps old
                     readers working while new readers rely on the hint.
    """

    DEFAULT = auto()
    LIST = auto()
    MAP = auto()
    PREFER_ARRAY = auto()
    FORCE_OBJECT = auto()
    ALLOW_SUBTYPE = auto()
    DECODE_ONLY = auto()


@dataclass(frozen=True, slots=True)
class Hint:
    """A type hint with a modifier.

    Attributes:
        parent:   The wrapped hint: a class, a type identifier string, an
                  ``Abbrev`` or another ``Hint``.
        modifier: How ``parent`` applies to the value.
    """

    parent: HintLike
    modifier: HintType = HintType.DEFAULT

    @classmethod
    def build(cls, hint: HintLike, *modifiers: HintType) -> HintLike:
        """Wrap ``hint`` in ``modifiers``, innermost first.

        Modifiers read right-to-left, as in C declarations: a dict whose
        values are lists of ``Foo`` is
        ``Hint.build(Foo, HintType.LIST, HintType.MAP)``.

        Args:
            hint:      The innermost hint.
            modifiers: Modifiers to apply, innermost first.

        Returns:
            ``hint`` itself when no modifiers are given, else a ``Hint``.
        """
        for modifier in modifiers:
            hint = cls(hint, modifier)
        return hint

    def __str__(self) -> str:
        return f"{self.modifier.name}({describe(self.parent)})"


@dataclass(frozen=True, slots=True)
class Abbrev:
    """A short, registered name for a hint.

    Attributes:
        name: The abbreviation, without the wire prefix.
        hint: The hint the abbreviation stands for.
    """

    name: str
    hint: HintLike

    def is_same_as(self, other: Abbrev) -> bool:
        """Return True if ``other`` has the same name and an equivalent hint."""
        return self.name == other.name and _hint_key(self.hint) == _hint_key(other.hint)

    def __str__(self) -> str:
        return f"@{self.name}={describe(self.hint)}"


HintLike: TypeAlias = "type | str | Hint | Abbrev"


def describe(hint: HintLike | None) -> str:
    """Return a short human-readable rendering of ``hint`` for messages."""
    if isinstance(hint, type):
        return hint.__qualname__
    return str(hint)


def _hint_key(hint: HintLike | None) -> object:
    # Classes compare by identity; everything else by value.
    if isinstance(hint, Hint):
        return (_hint_key(hint.parent), hint.modifier)
    if isinstance(hint, Abbrev):
        return ("abbrev", hint.name, _hint_key(hint.hint))
    return hint


def list_of(hint: HintLike) -> Hint:
    return Hint(hint, HintType.LIST)


def map_of(hint: HintLike) -> Hint:
    return Hint(hint, HintType.MAP)


def prefer_array(hint: HintLike) -> Hint:
    return Hint(hint, HintType.PREFER_ARRAY)


def force_object(hint: HintLike) -> Hint:
    return Hint(hint, HintType.FORCE_OBJECT)


def allow_subtype(hint: HintLike) -> Hint:
    return Hint(hint, HintType.ALLOW_SUBTYPE)


def decode_only(hint: HintLike) -> Hint:
    return Hint(hint, HintType.DECODE_ONLY)
