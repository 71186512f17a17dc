"""GenericRecordCodec: codec for anonymous ``types.SimpleNamespace`` records."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

__all__ = ["GENERIC_RECORD_CODEC", "GenericRecordCodec"]


class GenericRecordCodec:
    """Stateless codec mapping a namespace's attributes to a dict and back.

    No field hints are given: every typed attribute value carries its own
    type marker.
    """

    def to_record(self, obj: SimpleNamespace) -> dict[str, Any]:
        return dict(vars(obj))

    def from_record(self, cls: type, record: Any) -> SimpleNamespace:
        if isinstance(record, list):
            record = {str(i): v for i, v in enumerate(record)}
        return cls(**record)

    def hint_for(self, cls: type, key: str) -> None:
        return None


GENERIC_RECORD_CODEC = GenericRecordCodec()
