"""Tests for the Hint and Abbrev dataclasses and the HintType StrEnum."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from samples import SampleObject

from json_typed_codec.hints import (
    Abbrev,
    Hint,
    HintType,
    allow_subtype,
    decode_only,
    force_object,
    list_of,
    map_of,
    prefer_array,
)


class TestHintType:
    def test_members(self) -> None:
        assert {m.name for m in HintType} == {
            "DEFAULT",
            "LIST",
            "MAP",
            "PREFER_ARRAY",
            "FORCE_OBJECT",
            "ALLOW_SUBTYPE",
            "DECODE_ONLY",
        }

    def test_is_str_subclass(self) -> None:
        assert HintType.LIST == "list"
        assert isinstance(HintType.DECODE_ONLY, str)


class TestHint:
    def test_default_modifier(self) -> None:
        assert Hint(SampleObject).modifier is HintType.DEFAULT

    def test_frozen(self) -> None:
        hint = Hint(SampleObject)
        with pytest.raises(FrozenInstanceError):
            hint.modifier = HintType.LIST  # type: ignore[misc]

    def test_value_equality(self) -> None:
        assert list_of(SampleObject) == Hint(SampleObject, HintType.LIST)
        assert list_of(SampleObject) != map_of(SampleObject)

    def test_build_applies_innermost_first(self) -> None:
        hint = Hint.build(SampleObject, HintType.LIST, HintType.MAP)
        assert hint == map_of(list_of(SampleObject))

    def test_build_without_modifiers(self) -> None:
        assert Hint.build(SampleObject) is SampleObject

    def test_str(self) -> None:
        assert str(map_of(list_of(SampleObject))) == "MAP(LIST(SampleObject))"
        assert str(decode_only("samples:Pet")) == "DECODE_ONLY(samples:Pet)"

    @pytest.mark.parametrize(
        ("helper", "modifier"),
        [
            (list_of, HintType.LIST),
            (map_of, HintType.MAP),
            (prefer_array, HintType.PREFER_ARRAY),
            (force_object, HintType.FORCE_OBJECT),
            (allow_subtype, HintType.ALLOW_SUBTYPE),
            (decode_only, HintType.DECODE_ONLY),
        ],
    )
    def test_helpers(self, helper: object, modifier: HintType) -> None:
        hint = helper(SampleObject)  # type: ignore[operator]
        assert hint == Hint(SampleObject, modifier)


class TestAbbrev:
    def test_same_as(self) -> None:
        assert Abbrev("so", SampleObject).is_same_as(Abbrev("so", SampleObject))
        assert Abbrev("l", list_of(SampleObject)).is_same_as(Abbrev("l", list_of(SampleObject)))

    def test_not_same_as(self) -> None:
        assert not Abbrev("so", SampleObject).is_same_as(Abbrev("other", SampleObject))
        assert not Abbrev("so", SampleObject).is_same_as(Abbrev("so", list_of(SampleObject)))

    def test_str(self) -> None:
        assert str(Abbrev("so", SampleObject)) == "@so=SampleObject"
