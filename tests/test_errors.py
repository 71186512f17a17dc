"""Tests for error reporting and find_unserializable.

Tests cover:
- The exception hierarchy (library base class plus builtin base)
- Values rejected while encoding
- Markers rejected while decoding
- Registration conflicts
- JSON Pointer reporting of the first unserializable value
"""

from __future__ import annotations

import io
import math
from typing import Any

import pytest
from samples import Plain, SampleList, SampleObject

from json_typed_codec import (
    BadHintModifierError,
    DuplicateCodecError,
    InvalidAbbreviationError,
    JsonCodec,
    JsonCodecError,
    NotSerializableError,
    UnknownTypeError,
    UnserializableValueError,
    force_object,
    list_of,
    prefer_array,
)
from json_typed_codec.codecs import STATIC_CLASS_CODEC


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "builtin"),
        [
            (UnserializableValueError, TypeError),
            (NotSerializableError, TypeError),
            (UnknownTypeError, ValueError),
            (InvalidAbbreviationError, ValueError),
            (DuplicateCodecError, ValueError),
            (BadHintModifierError, ValueError),
        ],
    )
    def test_double_inheritance(self, error: type[Exception], builtin: type[Exception]) -> None:
        assert issubclass(error, JsonCodecError)
        assert issubclass(error, builtin)


class TestEncodeErrors:
    @pytest.mark.parametrize(
        "value",
        [
            (1, 2),
            {1, 2},
            b"bytes",
            lambda: None,
            math,
            io.StringIO(),
            SampleObject,
            (x for x in range(2)),
        ],
    )
    def test_exotic_values(self, value: Any) -> None:
        with pytest.raises(UnserializableValueError):
            JsonCodec().encode_to_tree(value)

    def test_exotic_value_nested(self) -> None:
        with pytest.raises(UnserializableValueError):
            JsonCodec().encode_to_tree({"a": [1, (2, 3)]})

    def test_non_string_keys(self) -> None:
        with pytest.raises(UnserializableValueError, match="keys must be strings"):
            JsonCodec().encode_to_tree({1: "a"})

    def test_class_without_codec(self) -> None:
        with pytest.raises(NotSerializableError, match="Plain"):
            JsonCodec().encode_to_tree([Plain()])

    def test_caught_as_type_error(self) -> None:
        with pytest.raises(TypeError):
            JsonCodec().encode_to_text(Plain())

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_float(self, value: float) -> None:
        with pytest.raises(UnserializableValueError, match="non-finite"):
            JsonCodec().encode_to_text({"a": value})

    def test_non_finite_float_in_tree(self) -> None:
        with pytest.raises(UnserializableValueError):
            JsonCodec().encode_to_tree([SampleObject("x"), math.nan])
        with pytest.raises(UnserializableValueError):
            JsonCodec().encode_to_tree(math.inf)

    def test_non_finite_float_caught_as_library_error(self) -> None:
        with pytest.raises(JsonCodecError):
            JsonCodec().encode_to_text(SampleList(math.nan))

    def test_contradictory_modifiers(self) -> None:
        with pytest.raises(BadHintModifierError):
            JsonCodec().encode_to_tree(SampleList(1), prefer_array(force_object(SampleList)))

    def test_codec_returning_scalar(self) -> None:
        class BadCodec:
            def to_record(self, obj: Any) -> Any:
                return "nope"

            def from_record(self, cls: type, record: Any) -> Any:
                return cls()

        codec = JsonCodec()
        codec.register_codec(Plain, BadCodec())
        with pytest.raises(NotSerializableError, match="expected dict or list"):
            codec.encode_to_tree(Plain())


class TestDecodeErrors:
    @pytest.mark.parametrize(
        "text",
        [
            '{"_type_":"no_such_module_xyz:Thing"}',
            '{"_type_":"samples:NoSuchClass"}',
            '{"_type_":"samples:Plain"}',
            '{"_type_":42}',
            '{"_type_":[1,2,3]}',
        ],
    )
    def test_unknown_types(self, text: str) -> None:
        with pytest.raises(UnknownTypeError):
            JsonCodec().decode_from_text(text)

    def test_unknown_hint_identifier(self) -> None:
        with pytest.raises(UnknownTypeError):
            JsonCodec().decode_from_text('{"a":1}', "no_such_module_xyz:Thing")

    def test_unknown_abbreviation(self) -> None:
        with pytest.raises(InvalidAbbreviationError):
            JsonCodec().decode_from_text('{"_type_":"@zz"}')

    def test_abbreviation_for_container_hint(self) -> None:
        codec = JsonCodec()
        codec.register_abbrev("many", list_of(SampleObject))
        with pytest.raises(InvalidAbbreviationError):
            codec.decode_from_text('{"_type_":"@many"}')

    def test_malformed_json(self) -> None:
        with pytest.raises(ValueError):
            JsonCodec().decode_from_text("{not json")


class TestRegistrationErrors:
    def test_duplicate_codec(self) -> None:
        codec = JsonCodec()
        codec.register_codec(Plain, STATIC_CLASS_CODEC)
        with pytest.raises(DuplicateCodecError):
            codec.register_codec(Plain, STATIC_CLASS_CODEC)

    def test_explicit_codec_overrides_built_codec(self) -> None:
        class UpperCodec:
            def to_record(self, obj: SampleObject) -> dict[str, Any]:
                return {"property": obj.property.upper()}

            def from_record(self, cls: type, record: dict[str, Any]) -> SampleObject:
                return SampleObject(record["property"].lower())

        codec = JsonCodec()
        assert codec.encode_to_tree(SampleObject("a"), SampleObject) == {"property": "a"}
        codec.register_codec(SampleObject, UpperCodec())
        assert codec.encode_to_tree(SampleObject("a"), SampleObject) == {"property": "A"}


class TestFindUnserializable:
    def test_serializable(self) -> None:
        value = {"a": [1, SampleObject("x")], "b": None}
        assert JsonCodec().find_unserializable(value) is None

    def test_root(self) -> None:
        assert JsonCodec().find_unserializable(Plain()) == ""

    def test_nested_pointer(self) -> None:
        value = {"a": [1, {"b/c": (1, 2)}]}
        assert JsonCodec().find_unserializable(value) == "/a/1/b~1c"

    def test_tilde_escaped(self) -> None:
        assert JsonCodec().find_unserializable({"~k": [b"x"]}) == "/~0k/0"

    def test_inside_typed_object(self) -> None:
        value = [SampleList(1, Plain())]
        assert JsonCodec().find_unserializable(value) == "/0/1"

    def test_non_string_key(self) -> None:
        assert JsonCodec().find_unserializable({"a": {1: 2}}) == "/a"

    def test_non_finite_float(self) -> None:
        assert JsonCodec().find_unserializable([1.0, math.inf]) == "/1"

    def test_expect_decode_local_class(self) -> None:
        class Local:
            def to_json_record(self) -> dict[str, Any]:
                return {}

            @classmethod
            def from_json_record(cls, record: dict[str, Any]) -> Local:
                return cls()

        codec = JsonCodec()
        value = {"x": Local()}
        assert codec.find_unserializable(value) is None
        assert codec.find_unserializable(value, expect_decode=True) == "/x"
        codec.register_type(Local, "Local")
        assert codec.find_unserializable(value, expect_decode=True) is None
