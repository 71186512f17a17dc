"""NdarrayCodec: codec for ``numpy.ndarray`` values.

numpy is an optional dependency: it is imported when ``NdarrayCodec`` is
*instantiated*, so importing this module on a base install does not raise
``ImportError``.

Arrays are recorded as ``{"dtype": ..., "shape": [...], "data": [...]}``
where ``data`` is the nested-list form produced by ``ndarray.tolist()``.
Only dtypes whose elements convert to JSON scalars (bool, integer, float,
unicode) round-trip.

Install the optional dependency with::

    pip install json-typed-codec[numpy]

Example::

    import numpy as np
    from json_typed_codec import JsonCodec
    from json_typed_codec.codecs.numpy import NdarrayCodec

    codec = JsonCodec()
    codec.register_codec(np.ndarray, NdarrayCodec())
    text = codec.encode_to_text(np.eye(2))
    restored = codec.decode_from_text(text)
"""

from __future__ import annotations

from typing import Any

__all__ = ["NdarrayCodec"]


class NdarrayCodec:
    """Codec for numpy arrays.

    Raises:
        ImportError: If numpy is not installed.  The message includes the
            install command.
    """

    def __init__(self) -> None:
        try:
            import numpy as np
        except ImportError as exc:
            raise ImportError(
                "numpy is required for NdarrayCodec. "
                "Install with: pip install json-typed-codec[numpy]"
            ) from exc
        self._np = np

    def to_record(self, obj: Any) -> dict[str, Any]:
        return {
            "dtype": obj.dtype.str,
            "shape": list(obj.shape),
            "data": obj.tolist(),
        }

    def from_record(self, cls: type, record: dict[str, Any]) -> Any:
        dtype = self._np.dtype(record["dtype"])
        data = self._np.asarray(record["data"], dtype=dtype)
        return data.reshape(tuple(record["shape"]))

    def hint_for(self, cls: type, key: str) -> None:
        return None
