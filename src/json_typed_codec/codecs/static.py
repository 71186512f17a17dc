"""StaticClassCodec: proxies to methods on the codecable class itself.

Used for every class satisfying the ``JsonCodecable`` protocol.  Encoding
calls ``obj.to_json_record()``; decoding calls
``cls.from_json_record(record)``; field hints come from the optional
classmethod ``cls.json_hint_for(key)``.  The codec is stateless, so a single
module-level instance serves every class.

A class that builds its own codec through ``json_class_codec`` can return
``static_class_codec()`` for the default behaviour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_typed_codec.hints.types import HintLike
    from json_typed_codec.protocols import JsonRecord

__all__ = ["STATIC_CLASS_CODEC", "StaticClassCodec", "static_class_codec"]


class StaticClassCodec:
    """Stateless codec delegating to ``to_json_record``/``from_json_record``."""

    def to_record(self, obj: Any) -> JsonRecord:
        return obj.to_json_record()

    def from_record(self, cls: type, record: JsonRecord) -> Any:
        return cls.from_json_record(record)  # type: ignore[attr-defined]

    def hint_for(self, cls: type, key: str) -> HintLike | None:
        json_hint_for = getattr(cls, "json_hint_for", None)
        if json_hint_for is None:
            return None
        return json_hint_for(key)


STATIC_CLASS_CODEC = StaticClassCodec()


def static_class_codec() -> StaticClassCodec:
    """Return the shared ``StaticClassCodec``."""
    return STATIC_CLASS_CODEC
