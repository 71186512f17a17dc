"""EnumClassCodec: codec for ``enum.Enum`` members.

Members of enums mixed with ``int`` or ``str`` are recorded by value
(``{"value": 2}``), which survives renaming a member.  Other enums are
recorded by name (``{"name": "RED"}``), since their values need not be
JSON-compatible.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = ["ENUM_CLASS_CODEC", "EnumClassCodec"]


class EnumClassCodec:
    """Stateless codec for enum members."""

    def to_record(self, obj: Enum) -> dict[str, Any]:
        if isinstance(obj, (int, str)):
            return {"value": obj.value}
        return {"name": obj.name}

    def from_record(self, cls: type[Enum], record: dict[str, Any]) -> Enum:
        if "value" in record:
            return cls(record["value"])
        return cls[record["name"]]

    def hint_for(self, cls: type, key: str) -> None:
        return None


ENUM_CLASS_CODEC = EnumClassCodec()
