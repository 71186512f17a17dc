"""Codecs subpackage: the built-in ``ClassCodec`` implementations.

The base install provides the stateless codecs the engine falls back on:

- ``StaticClassCodec`` for classes satisfying ``JsonCodecable``
- ``EnumClassCodec`` for ``enum.Enum`` members
- ``GenericRecordCodec`` for ``types.SimpleNamespace`` records

``NdarrayCodec`` is available via the numpy extra::

    pip install json-typed-codec[numpy]
"""

from json_typed_codec.codecs.enums import ENUM_CLASS_CODEC, EnumClassCodec
from json_typed_codec.codecs.record import GENERIC_RECORD_CODEC, GenericRecordCodec
from json_typed_codec.codecs.static import (
    STATIC_CLASS_CODEC,
    StaticClassCodec,
    static_class_codec,
)

# NdarrayCodec imports numpy lazily at instantiation, so the class itself is
# always importable; it is exported from json_typed_codec.codecs.numpy only.
__all__ = [
    "ENUM_CLASS_CODEC",
    "GENERIC_RECORD_CODEC",
    "STATIC_CLASS_CODEC",
    "EnumClassCodec",
    "GenericRecordCodec",
    "StaticClassCodec",
    "static_class_codec",
]
