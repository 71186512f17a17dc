"""Typed JSON codec - self-describing JSON for object graphs."""

from __future__ import annotations

from json_typed_codec.api import (
    decode_from_text,
    decode_from_tree,
    encode_to_text,
    encode_to_tree,
)
from json_typed_codec.codec import JsonCodec
from json_typed_codec.config import CodecConfig
from json_typed_codec.errors import (
    BadHintModifierError,
    ConflictingAbbreviationError,
    DuplicateCodecError,
    InvalidAbbreviationError,
    JsonCodecError,
    NotSerializableError,
    UnknownTypeError,
    UnserializableValueError,
)
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
from json_typed_codec.protocols import (
    ClassCodec,
    CodecFactory,
    JsonCodecable,
    JsonCodecInterface,
)
from json_typed_codec.registry import TypeRegistry

__version__: str = "0.1.0"
__all__: list[str] = [
    "Abbrev",
    "BadHintModifierError",
    "ClassCodec",
    "CodecConfig",
    "CodecFactory",
    "ConflictingAbbreviationError",
    "DuplicateCodecError",
    "Hint",
    "HintType",
    "InvalidAbbreviationError",
    "JsonCodec",
    "JsonCodecError",
    "JsonCodecInterface",
    "JsonCodecable",
    "NotSerializableError",
    "TypeRegistry",
    "UnknownTypeError",
    "UnserializableValueError",
    "allow_subtype",
    "decode_from_text",
    "decode_from_tree",
    "decode_only",
    "encode_to_text",
    "encode_to_tree",
    "force_object",
    "list_of",
    "map_of",
    "prefer_array",
]
