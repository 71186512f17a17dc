"""Integration tests for the module-level API functions.

All imports are from the top-level ``json_typed_codec`` package.  Covers the
four one-shot functions, config forwarding, and statelessness between calls.
"""

from __future__ import annotations

from samples import SampleObject

from json_typed_codec import (
    CodecConfig,
    decode_from_text,
    decode_from_tree,
    encode_to_text,
    encode_to_tree,
    list_of,
)


class TestTextFunctions:
    def test_round_trip(self) -> None:
        value = {"a": [SampleObject("x")]}
        assert decode_from_text(encode_to_text(value)) == value

    def test_hint_forwarded(self) -> None:
        text = encode_to_text([SampleObject("x")], list_of(SampleObject))
        assert text == '[{"property":"x"}]'
        assert decode_from_text(text, list_of(SampleObject)) == [SampleObject("x")]

    def test_config_forwarded(self) -> None:
        config = CodecConfig(type_key="kind", escape_html=False)
        text = encode_to_text([SampleObject("<x>")], config=config)
        assert '"kind":"samples:SampleObject"' in text
        assert "<x>" in text
        assert decode_from_text(text, config=config) == [SampleObject("<x>")]


class TestTreeFunctions:
    def test_round_trip(self) -> None:
        tree = encode_to_tree(SampleObject("x"))
        assert tree == {"property": "x", "_type_": "samples:SampleObject"}
        assert decode_from_tree(tree) == SampleObject("x")

    def test_plain_values_unchanged(self) -> None:
        assert encode_to_tree([1, {"a": None}]) == [1, {"a": None}]
        assert decode_from_tree([1, {"a": None}]) == [1, {"a": None}]


class TestStatelessness:
    def test_calls_share_no_registrations(self) -> None:
        first = encode_to_text(SampleObject("x"))
        second = encode_to_text(SampleObject("x"))
        assert first == second
