"""JsonCodec: recursive, self-describing JSON encoding of typed object graphs.

This is the engine that ties the hint model, the abbreviation registry, the
type registry and the per-class codecs together.

Encoding walks a value bottom-up:

- Scalars and None pass through unchanged.
- Typed objects are turned into a plain record by their ``ClassCodec``.
- Children that are containers or typed objects are encoded recursively,
  with a hint taken from the container hint's element or, failing that,
  from the parent codec's ``hint_for``.
- A node is *complex* when it came from a typed object, already contains
  the reserved key, or has a marked or hinted child.  Complex or hinted
  nodes are *marked*: the reserved key (``"_type_"`` by default) records
  the node's type unless it equals the hint, and displaces any user value
  already stored under that key.

Decoding mirrors this: a dict is only walked when it is marked or a hint is
supplied, so plain data decodes at the cost of a single key lookup.

Marker forms under the reserved key:

- ``"Foo"`` / ``"@foo"``: type identifier or abbreviation tag.
- ``[user]``: the user's own value for the reserved key; type equals hint.
- ``[user, "Foo"]``: the user's own value plus a type tag.
- ``[]``: a list-shaped record written with braces; type equals hint.
- ``["Foo", []]``: a list-shaped record written with braces, plus a tag.

List-shaped records in brace form use the keys ``"0"``, ``"1"``, ... and are
handed back to their codec as a list only when the marker says so, or when
the decoded type is ``list`` itself.  A dict-shaped record with the same
keys stays a dict.

A ``JsonCodec`` owns mutable registries and a codec cache and does no
internal locking; use one instance per thread or synchronize externally.

Example::

    from json_typed_codec import JsonCodec

    codec = JsonCodec()
    codec.register_type(SampleObject, "SampleObject")
    codec.encode_to_text(SampleObject("x"))
    # '{"property":"x","_type_":"SampleObject"}'
    codec.encode_to_text(SampleObject("x"), SampleObject)
    # '{"property":"x"}'
"""

from __future__ import annotations

import io
import json
import logging
import math
import types
from collections.abc import Iterable
from enum import Enum
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

from json_typed_codec.cache import CodecCache
from json_typed_codec.codecs.enums import ENUM_CLASS_CODEC
from json_typed_codec.codecs.record import GENERIC_RECORD_CODEC
from json_typed_codec.codecs.static import STATIC_CLASS_CODEC
from json_typed_codec.config import CodecConfig
from json_typed_codec.errors import (
    DuplicateCodecError,
    NotSerializableError,
    UnknownTypeError,
    UnserializableValueError,
)
from json_typed_codec.hints.abbrev import AbbrevRegistry
from json_typed_codec.hints.resolver import ResolvedHint, resolve_hint
from json_typed_codec.hints.types import describe
from json_typed_codec.registry import TypeRegistry

if TYPE_CHECKING:
    from json_typed_codec.hints.types import Abbrev, HintLike
    from json_typed_codec.protocols import ClassCodec, JsonRecord, Services

__all__ = ["JsonCodec"]

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)

_EXOTIC = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
    io.IOBase,
)

_HTML_ESCAPES = str.maketrans({"<": "\\u003C", ">": "\\u003E", "&": "\\u0026"})


class JsonCodec:
    """Encode values to JSON and back, preserving their types.

    Args:
        services: Read-only service container handed to classes that build
            their own codecs via ``json_class_codec``.  Defaults to an empty
            mapping.
        config: Wire-format settings.  Defaults to ``CodecConfig()``.
    """

    def __init__(
        self,
        services: Services | None = None,
        config: CodecConfig | None = None,
    ) -> None:
        self._config: CodecConfig = config if config is not None else CodecConfig()
        self._services: Services = services if services is not None else {}
        self._types = TypeRegistry(
            resolve_types=self._config.resolve_types,
            import_modules=self._config.import_modules,
        )
        self._abbrevs = AbbrevRegistry(self._types)
        self._codecs = CodecCache()
        self._registered: set[type] = set()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> CodecConfig:
        """The wire-format settings of this codec."""
        return self._config

    @property
    def types(self) -> TypeRegistry:
        """The class <-> identifier registry of this codec."""
        return self._types

    @property
    def abbreviations(self) -> AbbrevRegistry:
        """The abbreviation registry of this codec."""
        return self._abbrevs

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encode_to_text(self, value: Any, hint: HintLike | None = None) -> str:
        """Encode ``value`` to compact JSON text.

        Slashes and non-ASCII characters are written unescaped; ``<``, ``>``
        and ``&`` are escaped unless ``config.escape_html`` is False.

        Args:
            value: The value to encode.
            hint:  Optional hint for ``value``'s type.  Pass the same hint to
                   ``decode_from_text``.

        Returns:
            JSON text.

        Raises:
            UnserializableValueError: If the tree contains an exotic value or
                a non-finite float.
            NotSerializableError: If a typed object has no codec.
        """
        tree = self.encode_to_tree(value, hint)
        text = json.dumps(tree, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        if self._config.escape_html:
            text = text.translate(_HTML_ESCAPES)
        return text

    def decode_from_text(self, text: str | bytes, hint: HintLike | None = None) -> Any:
        """Decode JSON text produced by ``encode_to_text``.

        Raises:
            json.JSONDecodeError: If ``text`` is not valid JSON.
            UnknownTypeError: If a type marker cannot be resolved to a codec.
            InvalidAbbreviationError: If an abbreviation tag is invalid.
        """
        return self.decode_from_tree(json.loads(text), hint)

    def encode_to_tree(self, value: Any, hint: HintLike | None = None) -> Any:
        """Encode ``value`` to a JSON-compatible tree of dicts, lists and scalars."""
        return self._encode(value, hint)

    def decode_from_tree(self, tree: Any, hint: HintLike | None = None) -> Any:
        """Decode a JSON-compatible tree produced by ``encode_to_tree``."""
        return self._decode(tree, hint)

    def register_codec(self, cls: type, codec: ClassCodec) -> None:
        """Use ``codec`` for ``cls``, overriding any automatically built codec.

        Raises:
            DuplicateCodecError: If a codec was already registered for ``cls``.
        """
        if cls in self._registered:
            msg = f"A codec is already registered for {describe(cls)}"
            raise DuplicateCodecError(msg)
        self._registered.add(cls)
        self._codecs.put(cls, codec)
        logger.debug("Registered %s for %s", type(codec).__name__, describe(cls))

    def register_abbrev(self, name: str, hint: HintLike) -> Abbrev:
        """Register ``name`` as an abbreviation for ``hint``.

        See ``AbbrevRegistry.register``.
        """
        return self._abbrevs.register(name, hint)

    def lookup_abbrev(self, name: str) -> Abbrev | None:
        """Return the abbreviation registered under ``name``, if any."""
        return self._abbrevs.lookup(name)

    def register_type(
        self,
        cls: type,
        name: str | None = None,
        aliases: Iterable[str] = (),
    ) -> str:
        """Give ``cls`` a canonical wire identifier and optional aliases.

        See ``TypeRegistry.register``.
        """
        return self._types.register(cls, name, aliases)

    def codec_for(self, cls: type) -> ClassCodec | None:
        """Return the codec for ``cls``, building and caching it on first use.

        Subclasses may override this to support further kinds of class,
        typically calling ``register_codec`` to cache what they build.

        Returns:
            The codec, or None if ``cls`` is not serializable.
        """
        codec = self._codecs.get(cls)
        if codec is None:
            codec = self._build_codec(cls)
            if codec is not None:
                self._codecs.put(cls, codec)
                logger.debug("Built %s for %s", type(codec).__name__, describe(cls))
        return codec

    def find_unserializable(self, value: Any, *, expect_decode: bool = False) -> str | None:
        """Return a JSON Pointer to the first value that cannot be encoded.

        Args:
            value:         The value to check.
            expect_decode: Also report typed objects whose type marker would
                           not resolve back to their class when decoding.

        Returns:
            An RFC 6901 pointer (``""`` for the root, ``"/a/0"`` for nested
            values), or None if the whole value can be encoded.
        """
        return self._find_unserializable(value, "", expect_decode)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def _encode(self, value: Any, hint: HintLike | None) -> Any:
        if _is_scalar(value):
            return _check_finite(value)

        resolved = resolve_hint(hint, self._types)
        codec: ClassCodec | None = None
        is_complex = False
        record: JsonRecord
        if isinstance(value, dict):
            cls: type = dict
            record = dict(value)
            is_complex = self._is_marked(record)
        elif isinstance(value, list):
            cls = list
            record = list(value)
        else:
            cls = type(value)
            if (
                resolved.allow_subtype
                and resolved.target is not None
                and issubclass(cls, resolved.target)
            ):
                cls = resolved.target
            codec = self.codec_for(cls)
            if codec is None:
                raise _no_codec_error(value)
            record = _to_record(codec, value)
            is_complex = True

        is_map = isinstance(record, dict)
        items = list(record.items()) if is_map else list(enumerate(record))
        for key, child in items:
            if is_map and not isinstance(key, str):
                msg = f"Dict keys must be strings, got {key!r} in {describe(cls)}"
                raise UnserializableValueError(msg)
            if _is_scalar(child):
                _check_finite(child)
                continue
            child_hint = resolved.element
            if child_hint is None:
                child_hint = _field_hint(codec, cls, key)
            encoded = self._encode(child, child_hint)
            record[key] = encoded
            if child_hint is not None or (isinstance(encoded, dict) and self._is_marked(encoded)):
                # A record holding typed values must be walked when decoding.
                is_complex = True

        if not is_complex and resolved.target is None:
            return record
        return self._finish(record, cls, resolved)

    def _finish(self, record: JsonRecord, cls: type, resolved: ResolvedHint) -> JsonRecord:
        """Mark an encoded record, choosing bracket or brace form for lists."""
        as_list = isinstance(record, list)
        if as_list:
            if (
                cls is resolved.target
                and not resolved.force_object
                and (cls is list or resolved.prefer_array)
            ):
                return record
            record = {str(i): v for i, v in enumerate(record)}
        self._mark(record, cls, resolved.target, as_list=as_list)
        return record

    def _tag_for(self, cls: type) -> str:
        abbrev = self._abbrevs.for_type(cls)
        if abbrev is not None:
            return self._config.abbrev_prefix + abbrev.name
        return self._types.identifier_for(cls)

    # ------------------------------------------------------------------
    # Marking (subclasses may replace the reserved-key scheme)
    # ------------------------------------------------------------------

    def _is_marked(self, record: dict[str, Any]) -> bool:
        """Return True if ``record`` carries the reserved key."""
        return self._config.type_key in record

    def _mark(
        self,
        record: dict[str, Any],
        cls: type,
        hint: type | None,
        *,
        as_list: bool = False,
    ) -> None:
        """Record ``cls`` in ``record`` relative to the hinted type ``hint``.

        A user value already stored under the reserved key is moved into a
        ``[value]`` or ``[value, tag]`` pair.  ``as_list`` flags a record that
        was a list before it was written with index keys; it is marked
        ``[]`` or ``[tag, []]`` so decoding turns it back into a list.  Plain
        lists need no flag since their type implies the shape.  When ``cls``
        is ``hint`` and nothing needs flagging or displacing, no key is
        written.
        """
        key = self._config.type_key
        tag = None if cls is hint else self._tag_for(cls)
        if as_list and cls is not list:
            # Index keys never collide with the reserved key.
            record[key] = [] if tag is None else [tag, []]
        elif key in record:
            record[key] = [record[key]] if tag is None else [record[key], tag]
        elif tag is not None:
            record[key] = tag

    def _unmark(self, record: dict[str, Any], hint: type | None) -> tuple[type, bool]:
        """Remove the marker from ``record``.

        Restores any displaced user value under the reserved key.  Without a
        tag, the recorded type is the hinted type, or ``dict`` when there is
        no hint.

        Returns:
            The recorded type, and whether the record was flagged as
            list-shaped.
        """
        key = self._config.type_key
        if key not in record:
            return (hint if hint is not None else dict), False
        marker = record.pop(key)
        as_list = False
        tag = None
        if not isinstance(marker, list):
            tag = marker
        elif not marker:
            as_list = True
        elif len(marker) == 1:
            record[key] = marker[0]
        elif len(marker) == 2 and marker[1] == []:
            as_list, tag = True, marker[0]
        elif len(marker) == 2:
            record[key], tag = marker
        else:
            msg = f"Malformed type marker: {marker!r}"
            raise UnknownTypeError(msg)
        if tag is None:
            return (hint if hint is not None else dict), as_list
        return self._type_for_tag(tag), as_list

    def _type_for_tag(self, tag: Any) -> type:
        if not isinstance(tag, str):
            msg = f"Type marker must be a string, got {tag!r}"
            raise UnknownTypeError(msg)
        prefix = self._config.abbrev_prefix
        if tag.startswith(prefix):
            return self._abbrevs.resolve_tag(tag[len(prefix) :])
        cls = self._types.resolve(tag)
        if cls is None:
            msg = f"Unknown type {tag!r}"
            raise UnknownTypeError(msg)
        return cls

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _decode(self, tree: Any, hint: HintLike | None) -> Any:
        record: JsonRecord
        if isinstance(tree, dict):
            if hint is None and not self._is_marked(tree):
                return tree
            resolved = resolve_hint(hint, self._types, for_decode=True)
            record = dict(tree)
            cls, as_list = self._unmark(record, resolved.target)
            if as_list or cls is list:
                record = _indexed_values(record)
        elif isinstance(tree, list):
            if hint is None:
                return tree
            resolved = resolve_hint(hint, self._types, for_decode=True)
            record = list(tree)
            cls = resolved.target if resolved.target is not None else list
        else:
            return tree

        codec: ClassCodec | None = None
        if cls is not dict and cls is not list:
            codec = self.codec_for(cls)
            if codec is None:
                msg = f"No codec for decoded type {self._types.identifier_for(cls)!r}"
                raise UnknownTypeError(msg)

        items = list(record.items()) if isinstance(record, dict) else list(enumerate(record))
        for key, child in items:
            if not isinstance(child, (dict, list)):
                continue
            child_hint = resolved.element
            if child_hint is None:
                child_hint = _field_hint(codec, cls, key)
            record[key] = self._decode(child, child_hint)

        if codec is None:
            return record
        return codec.from_record(cls, record)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_codec(self, cls: type) -> ClassCodec | None:
        factory = getattr(cls, "json_class_codec", None)
        if factory is not None:
            return factory(self, self._services)
        if hasattr(cls, "to_json_record") and hasattr(cls, "from_json_record"):
            return STATIC_CLASS_CODEC
        if issubclass(cls, Enum):
            return ENUM_CLASS_CODEC
        if issubclass(cls, SimpleNamespace):
            return GENERIC_RECORD_CODEC
        return None

    def _find_unserializable(self, value: Any, path: str, expect_decode: bool) -> str | None:
        if isinstance(value, float) and not math.isfinite(value):
            return path
        if _is_scalar(value):
            return None
        if isinstance(value, dict):
            if any(not isinstance(key, str) for key in value):
                return path
            items: Iterable[tuple[Any, Any]] = value.items()
        elif isinstance(value, list):
            items = enumerate(value)
        else:
            cls = type(value)
            codec = self.codec_for(cls)
            if codec is None:
                return path
            if (
                expect_decode
                and self._abbrevs.for_type(cls) is None
                and self._types.resolve(self._types.identifier_for(cls)) is not cls
            ):
                return path
            record = codec.to_record(value)
            items = record.items() if isinstance(record, dict) else enumerate(record)
        for key, child in items:
            child_path = f"{path}/{_escape_pointer(str(key))}"
            found = self._find_unserializable(child, child_path, expect_decode)
            if found is not None:
                return found
        return None


def _field_hint(codec: ClassCodec | None, cls: type, key: str | int) -> HintLike | None:
    hint_for = getattr(codec, "hint_for", None)
    if hint_for is None:
        return None
    return hint_for(cls, str(key))


def _to_record(codec: ClassCodec, value: Any) -> JsonRecord:
    # Copy, so marking never mutates state the codec handed out.
    record = codec.to_record(value)
    if isinstance(record, dict):
        return dict(record)
    if isinstance(record, list):
        return list(record)
    msg = (
        f"{type(codec).__name__}.to_record returned {type(record).__name__}, "
        f"expected dict or list"
    )
    raise NotSerializableError(msg)


def _no_codec_error(value: Any) -> Exception:
    name = type(value).__qualname__
    if isinstance(value, _EXOTIC) or callable(value) or type(value).__module__ == "builtins":
        return UnserializableValueError(f"Cannot encode value of type {name}")
    return NotSerializableError(f"No codec for type {name}")


def _indexed_values(record: dict[str, Any]) -> list[Any]:
    """Return the values of a list-shaped record keyed "0".."n-1", in order."""
    try:
        return [record[str(i)] for i in range(len(record))]
    except KeyError:
        msg = f"List-shaped record must be keyed '0'..'n-1', got {sorted(record)!r}"
        raise UnknownTypeError(msg) from None


def _check_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        msg = f"Cannot encode non-finite float {value!r}"
        raise UnserializableValueError(msg)
    return value


def _escape_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _is_scalar(value: Any) -> bool:
    # Enum members mixed with int or str are typed objects, not scalars.
    return value is None or (isinstance(value, _SCALARS) and not isinstance(value, Enum))
