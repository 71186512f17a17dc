"""CodecConfig: wire-format settings for a JsonCodec instance.

CodecConfig is a frozen (immutable) dataclass, so a single instance can be
shared between codecs without one caller's changes leaking into another's
output.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CodecConfig"]


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable wire-format configuration.

    Attributes:
        type_key: Reserved object key holding a node's type marker.  Must
            not be a decimal index such as ``"0"``, which list-shaped
            records use as keys.  Defaults to ``"_type_"``.
        abbrev_prefix: Single character that distinguishes an abbreviation
            tag (``"@so"``) from a canonical type identifier.  Defaults to
            ``"@"``.
        escape_html: When True, ``<``, ``>`` and ``&`` are written as
            ``\\u003C``, ``\\u003E`` and ``\\u0026`` in JSON text so the output
            is safe to embed in HTML.  Default True.
        resolve_types: When True, type identifiers that were never
            registered are looked up in modules that are already imported.
            When False, only registered types can be decoded.  Default True.
        import_modules: Module name prefixes that may be imported to resolve
            an unregistered identifier whose module is not loaded yet.
            ``("myapp",)`` allows ``myapp`` and ``myapp.models`` but not
            ``myapplet``.  Decoding never imports any other module.  Default
            empty.
    """

    type_key: str = "_type_"
    abbrev_prefix: str = "@"
    escape_html: bool = True
    resolve_types: bool = True
    import_modules: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.type_key:
            msg = "type_key must be a non-empty string"
            raise ValueError(msg)
        if self.type_key.isdecimal():
            msg = f"type_key must not be a list index, got {self.type_key!r}"
            raise ValueError(msg)
        if len(self.abbrev_prefix) != 1:
            msg = f"abbrev_prefix must be a single character, got {self.abbrev_prefix!r}"
            raise ValueError(msg)
        if isinstance(self.import_modules, str):
            msg = "import_modules must be a sequence of module names, not a string"
            raise ValueError(msg)
