"""Protocols for the json-typed-codec extension points.

Codecs and codecable classes are matched structurally: any class with the
right methods passes ``isinstance`` checks, no base class required.

Example::

    from json_typed_codec.protocols import ClassCodec

    class PointCodec:
        def to_record(self, obj):
            return {"x": obj.x, "y": obj.y}

        def from_record(self, cls, record):
            return cls(record["x"], record["y"])

    assert isinstance(PointCodec(), ClassCodec)  # True, structural conformance
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from json_typed_codec.hints.types import HintLike

__all__ = [
    "ClassCodec",
    "CodecFactory",
    "JsonCodecInterface",
    "JsonCodecable",
    "JsonRecord",
    "Services",
]

JsonRecord: TypeAlias = "dict[str, Any] | list[Any]"
Services: TypeAlias = Mapping[str, Any]


@runtime_checkable
class ClassCodec(Protocol):
    """Converts objects of some class to and from a plain record.

    ``to_record`` returns a dict (or a list, for list-shaped objects) whose
    values may themselves be typed objects; the engine encodes them
    recursively and marks the result with whatever type information
    decoding needs.  ``from_record`` receives the record with every child
    already decoded.

    A codec may also define ``hint_for(cls, key) -> HintLike | None`` to
    supply a hint for the value stored under ``key``.  When the hint
    matches the child's runtime type, the child's type marker is omitted.
    """

    def to_record(self, obj: Any) -> JsonRecord: ...

    def from_record(self, cls: type, record: JsonRecord) -> Any: ...


@runtime_checkable
class JsonCodecable(Protocol):
    """A class that encodes itself.

    Classes satisfying this protocol are handled by the shared
    ``StaticClassCodec``, which calls ``to_json_record`` on instances and
    ``from_json_record`` on the class.  An optional classmethod
    ``json_hint_for(key)`` supplies per-field hints.
    """

    def to_json_record(self) -> JsonRecord: ...

    @classmethod
    def from_json_record(cls, record: JsonRecord) -> Any: ...


@runtime_checkable
class CodecFactory(Protocol):
    """A class that builds its own (possibly stateful) codec.

    ``json_class_codec`` is called once per ``JsonCodec`` with the codec
    itself and its service container; the result is cached for the life of
    that ``JsonCodec``.
    """

    @classmethod
    def json_class_codec(
        cls,
        codec: JsonCodecInterface,
        services: Services,
    ) -> ClassCodec: ...


@runtime_checkable
class JsonCodecInterface(Protocol):
    """The engine surface available to codecs that encode values themselves."""

    def encode_to_tree(self, value: Any, hint: HintLike | None = None) -> Any: ...

    def decode_from_tree(self, tree: Any, hint: HintLike | None = None) -> Any: ...
