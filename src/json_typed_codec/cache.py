"""CodecCache: per-engine memo of class -> ClassCodec.

Each ``JsonCodec`` owns one ``CodecCache``, so two codecs never share
resolved codecs (a stateful codec built from one service container must not
leak into another).  The cache is unbounded: codecs are built lazily on
first use and never evicted for the life of the owning ``JsonCodec``.

Example::

    from json_typed_codec.cache import CodecCache

    cache = CodecCache()
    cache.put(Point, PointCodec())
    cache.get(Point)     # PointCodec instance
    cache.curr_size      # 1
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cachetools import Cache

if TYPE_CHECKING:
    from json_typed_codec.protocols import ClassCodec

__all__ = ["CodecCache"]


class CodecCache:
    """Unbounded ``cachetools.Cache`` keyed by class."""

    def __init__(self) -> None:
        self._cache: Cache[type, ClassCodec] = Cache(maxsize=math.inf)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def curr_size(self) -> int:
        """The number of codecs currently cached."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Mapping surface
    # ------------------------------------------------------------------

    def __contains__(self, cls: object) -> bool:
        return cls in self._cache

    def get(self, cls: type) -> ClassCodec | None:
        """Return the cached codec for ``cls``, or None."""
        return self._cache.get(cls)

    def put(self, cls: type, codec: ClassCodec) -> None:
        """Cache ``codec`` for ``cls``, replacing any previous entry."""
        self._cache[cls] = codec
