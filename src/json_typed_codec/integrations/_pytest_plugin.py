"""pytest plugin for json-typed-codec.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.
"""

from __future__ import annotations

from typing import Any

import pytest

from json_typed_codec import JsonCodec
from json_typed_codec.hints.types import HintLike


@pytest.fixture(scope="session")
def assert_json_round_trip() -> Any:
    """Fixture that returns a callable encode/decode round-trip asserter.

    Usage in tests::

        def test_point(assert_json_round_trip):
            assert_json_round_trip(Point(1, 2))

        def test_wire_form(assert_json_round_trip):
            assert_json_round_trip([1, 2], expected="[1,2]")

    Returns:
        A callable ``_assert(value, hint=None, codec=None, expected=None)``
        that returns the encoded text and raises ``AssertionError`` when the
        decoded value differs from ``value`` or the text differs from
        ``expected``.
    """

    def _assert(
        value: Any,
        hint: HintLike | None = None,
        codec: JsonCodec | None = None,
        expected: str | None = None,
    ) -> str:
        """Encode ``value``, decode it again and compare.

        Args:
            value:    The value to round-trip.  Must support ``==``.
            hint:     Hint passed to both directions.
            codec:    Codec to use.  A fresh ``JsonCodec()`` when None.
            expected: Exact JSON text the encoding must produce, if given.

        Raises:
            AssertionError: On a text mismatch or a value mismatch.
        """
        codec = codec if codec is not None else JsonCodec()
        text = codec.encode_to_text(value, hint)
        if expected is not None and text != expected:
            raise AssertionError(
                f"Encoded JSON differs:\n  actual:   {text}\n  expected: {expected}"
            )
        decoded = codec.decode_from_text(text, hint)
        if decoded != value:
            raise AssertionError(
                f"JSON round trip changed the value:\n"
                f"  original: {value!r}\n"
                f"  decoded:  {decoded!r}\n"
                f"  json:     {text}"
            )
        return text

    return _assert
