"""Public API functions for json-typed-codec.

This module provides one-shot helpers for callers that need no registered
codecs, abbreviations or type names.  Each call creates a fresh ``JsonCodec``
so no registry state leaks between calls; build a ``JsonCodec`` directly to
register anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_typed_codec.codec import JsonCodec

if TYPE_CHECKING:
    from json_typed_codec.config import CodecConfig
    from json_typed_codec.hints.types import HintLike

__all__ = ["decode_from_text", "decode_from_tree", "encode_to_text", "encode_to_tree"]


def encode_to_text(
    value: Any,
    hint: HintLike | None = None,
    *,
    config: CodecConfig | None = None,
) -> str:
    """Encode ``value`` to compact, self-describing JSON text.

    Args:
        value:  Any mix of scalars, dicts, lists and codec-capable objects.
        hint:   Optional hint for ``value``'s type.  Types matching their
                hint are written without a marker.
        config: Wire-format settings.  Defaults to ``CodecConfig()`` when None.

    Returns:
        JSON text.
    """
    return JsonCodec(config=config).encode_to_text(value, hint)


def decode_from_text(
    text: str | bytes,
    hint: HintLike | None = None,
    *,
    config: CodecConfig | None = None,
) -> Any:
    """Decode JSON text produced by ``encode_to_text``.

    Args:
        text:   JSON text.
        hint:   The hint that was passed when encoding, if any.
        config: Wire-format settings.  Must match the encoding side.

    Returns:
        The decoded value, with typed objects rebuilt by their codecs.
    """
    return JsonCodec(config=config).decode_from_text(text, hint)


def encode_to_tree(
    value: Any,
    hint: HintLike | None = None,
    *,
    config: CodecConfig | None = None,
) -> Any:
    """Encode ``value`` to a JSON-compatible tree of dicts, lists and scalars."""
    return JsonCodec(config=config).encode_to_tree(value, hint)


def decode_from_tree(
    tree: Any,
    hint: HintLike | None = None,
    *,
    config: CodecConfig | None = None,
) -> Any:
    """Decode a JSON-compatible tree produced by ``encode_to_tree``."""
    return JsonCodec(config=config).decode_from_tree(tree, hint)
