"""Hint resolution: peel a nested hint down to a concrete target type.

``resolve_hint`` walks a hint outermost-first.  Flag modifiers
(PREFER_ARRAY, FORCE_OBJECT, ALLOW_SUBTYPE) are recorded and peeled; LIST
and MAP stop the walk, making the container class the target and handing
their parent down as the element hint; a class or type identifier ends the
walk.  Only one container level is resolved per call: ``list_of(list_of(Foo))``
resolves to target ``list`` with element hint ``list_of(Foo)``, which the
codec resolves again one level down.

Legacy string hints are translated before peeling:

- ``"Foo[]"`` -> ``list_of("Foo")``
- ``"Foo+"``  -> ``allow_subtype("Foo")``
- ``"Foo-"``  -> ``decode_only("Foo")``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from json_typed_codec.errors import BadHintModifierError, UnknownTypeError
from json_typed_codec.hints.types import Abbrev, Hint, HintLike, HintType, describe

if TYPE_CHECKING:
    from json_typed_codec.registry import TypeRegistry

__all__ = ["ResolvedHint", "parse_legacy_hint", "resolve_hint"]

_LEGACY_SUFFIXES: tuple[tuple[str, HintType], ...] = (
    ("[]", HintType.LIST),
    ("+", HintType.ALLOW_SUBTYPE),
    ("-", HintType.DECODE_ONLY),
)


@dataclass(frozen=True, slots=True)
class ResolvedHint:
    """The outcome of resolving one level of a hint.

    Attributes:
        target:        The concrete class the value is expected to have, the
                       ``list``/``dict`` sentinel for container hints, or None
                       when there is no (usable) hint.
        element:       Hint for each child of a container hint, else None.
        prefer_array:  PREFER_ARRAY was seen while peeling.
        force_object:  FORCE_OBJECT was seen while peeling.
        allow_subtype: ALLOW_SUBTYPE was seen while peeling.
    """

    target: type | None = None
    element: HintLike | None = None
    prefer_array: bool = False
    force_object: bool = False
    allow_subtype: bool = False


NO_HINT = ResolvedHint()


def parse_legacy_hint(hint: str) -> HintLike:
    """Translate suffix-encoded string hints into ``Hint`` objects.

    Suffixes nest from the right, so ``"Foo[]+"`` is
    ``allow_subtype(list_of("Foo"))``.  A string without a recognized
    suffix is returned unchanged.
    """
    for suffix, modifier in _LEGACY_SUFFIXES:
        if hint.endswith(suffix) and len(hint) > len(suffix):
            return Hint(parse_legacy_hint(hint[: -len(suffix)]), modifier)
    return hint


def resolve_hint(
    hint: HintLike | None,
    types: TypeRegistry,
    *,
    for_decode: bool = False,
) -> ResolvedHint:
    """Resolve the outermost level of ``hint``.

    Args:
        hint:       The hint to resolve, or None.
        types:      Registry used to turn type identifier strings into classes.
        for_decode: When False, a DECODE_ONLY modifier discards the rest of
                    the hint.  When True, DECODE_ONLY is transparent.

    Returns:
        A ``ResolvedHint``.

    Raises:
        BadHintModifierError: If PREFER_ARRAY and FORCE_OBJECT are combined.
        UnknownTypeError: If a type identifier string cannot be resolved.
    """
    if hint is None:
        return NO_HINT

    prefer_array = force_object = allow_subtype = False
    target: type | None = None
    element: HintLike | None = None
    current: HintLike | None = hint

    while current is not None:
        if isinstance(current, Abbrev):
            current = current.hint
            continue
        if isinstance(current, str):
            parsed = parse_legacy_hint(current)
            if isinstance(parsed, Hint):
                current = parsed
                continue
            target = types.resolve(parsed)
            if target is None:
                msg = f"Unknown type in hint: {parsed!r}"
                raise UnknownTypeError(msg)
            break
        if isinstance(current, type):
            target = current
            break

        modifier = current.modifier
        if modifier is HintType.LIST or modifier is HintType.MAP:
            element = current.parent
            target = list if modifier is HintType.LIST else dict
            break
        if modifier is HintType.DECODE_ONLY and not for_decode:
            break
        if modifier is HintType.PREFER_ARRAY:
            prefer_array = True
        elif modifier is HintType.FORCE_OBJECT:
            force_object = True
        elif modifier is HintType.ALLOW_SUBTYPE:
            allow_subtype = True
        current = current.parent

    if prefer_array and force_object:
        msg = f"PREFER_ARRAY and FORCE_OBJECT cannot be combined: {describe(hint)}"
        raise BadHintModifierError(msg)

    return ResolvedHint(
        target=target,
        element=element,
        prefer_array=prefer_array,
        force_object=force_object,
        allow_subtype=allow_subtype,
    )
