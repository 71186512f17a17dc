"""Exception hierarchy for json-typed-codec.

Every error derives from ``JsonCodecError`` and from the builtin exception
that best describes it, so callers can catch either the library-specific
class or a plain ``TypeError``/``ValueError``.  None of these errors is
retried or recovered from internally: they propagate to the caller of the
top-level encode/decode or registration call.
"""

from __future__ import annotations

__all__ = [
    "BadHintModifierError",
    "ConflictingAbbreviationError",
    "DuplicateCodecError",
    "InvalidAbbreviationError",
    "JsonCodecError",
    "NotSerializableError",
    "UnknownTypeError",
    "UnserializableValueError",
]


class JsonCodecError(Exception):
    """Base class for all json-typed-codec errors."""


class UnserializableValueError(JsonCodecError, TypeError):
    """The value is not null, a scalar, a container or a typed object.

    Raised for callables, modules, I/O handles and builtin non-JSON values
    such as tuples, sets and bytes, for non-finite floats, and for dicts with
    non-string keys.
    """


class NotSerializableError(JsonCodecError, TypeError):
    """A typed object's class has no resolvable codec."""


class UnknownTypeError(JsonCodecError, ValueError):
    """A decoded type marker names a type that cannot be resolved to a codec."""


class ConflictingAbbreviationError(JsonCodecError, ValueError):
    """An abbreviation name or its encode-side type is already taken."""


class DuplicateCodecError(JsonCodecError, ValueError):
    """A codec was explicitly registered twice for the same class."""


class InvalidAbbreviationError(JsonCodecError, ValueError):
    """A decoded abbreviation tag is unregistered or does not name a concrete type."""


class BadHintModifierError(JsonCodecError, ValueError):
    """A hint combines contradictory modifiers."""
