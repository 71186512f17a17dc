"""TypeRegistry: map classes to wire type identifiers and back.

A class's default identifier is ``"module:QualName"``; builtins drop the
module, so the container sentinels are simply ``"dict"`` and ``"list"``.
Registering a class can replace that identifier with a shorter canonical
name and add aliases, which is how a class that moved between modules keeps
decoding documents written under its old name.

Identifiers that were never registered are resolved by walking the qualified
name inside a module that is already imported.  A module that is not loaded
is only imported when its name matches one of the ``import_modules``
prefixes, so a document cannot make the decoder run arbitrary module code.
Classes defined inside functions (``<locals>`` in the qualname) can only be
resolved after registration.
"""

from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Iterable
from types import ModuleType, SimpleNamespace

__all__ = ["TypeRegistry", "default_identifier"]

logger = logging.getLogger(__name__)


def default_identifier(cls: type) -> str:
    """Return the import-based identifier for ``cls``."""
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}:{cls.__qualname__}"


class TypeRegistry:
    """Bidirectional class <-> identifier map for one codec.

    Args:
        resolve_types:  When True, unregistered identifiers are looked up in
                        loaded modules.
        import_modules: Module name prefixes that may be imported on demand.
    """

    def __init__(
        self,
        *,
        resolve_types: bool = True,
        import_modules: Iterable[str] = (),
    ) -> None:
        self._resolve_types = resolve_types
        self._import_modules = tuple(import_modules)
        self._by_name: dict[str, type] = {}
        self._names: dict[type, str] = {}
        for cls in (dict, list, SimpleNamespace):
            self.register(cls)

    def register(
        self,
        cls: type,
        name: str | None = None,
        aliases: Iterable[str] = (),
    ) -> str:
        """Register ``cls`` under a canonical name plus optional aliases.

        Args:
            cls:     The class to register.
            name:    Canonical identifier written when encoding.  Defaults to
                     the class's import-based identifier.
            aliases: Extra identifiers accepted when decoding.

        Returns:
            The canonical identifier.

        Raises:
            ValueError: If an identifier is already bound to another class.
        """
        canonical = name if name is not None else default_identifier(cls)
        for identifier in (canonical, *aliases):
            bound = self._by_name.get(identifier)
            if bound is not None and bound is not cls:
                msg = f"Type identifier {identifier!r} already names {bound!r}"
                raise ValueError(msg)
            self._by_name[identifier] = cls
        self._names[cls] = canonical
        return canonical

    def identifier_for(self, cls: type) -> str:
        """Return the canonical identifier written for ``cls``."""
        name = self._names.get(cls)
        return name if name is not None else default_identifier(cls)

    def resolve(self, identifier: str) -> type | None:
        """Return the class named by ``identifier``, or None if unresolvable."""
        cls = self._by_name.get(identifier)
        if cls is None and self._resolve_types:
            cls = self._find_type(identifier)
            if cls is not None:
                self._by_name[identifier] = cls
        return cls

    def _may_import(self, module_name: str) -> bool:
        """Return True if ``module_name`` matches an ``import_modules`` prefix."""
        return any(
            module_name == prefix or module_name.startswith(prefix + ".")
            for prefix in self._import_modules
        )

    def _find_type(self, identifier: str) -> type | None:
        module_name, sep, qualname = identifier.partition(":")
        if not sep:
            module_name, qualname = "builtins", identifier
        if not module_name or not qualname or "<locals>" in qualname:
            return None
        module = self._load_module(module_name)
        if module is None:
            return None
        obj: object = module
        for attr in qualname.split("."):
            obj = getattr(obj, attr, None)
            if obj is None:
                logger.debug("Type %r not found in module %r", identifier, module_name)
                return None
        return obj if isinstance(obj, type) else None

    def _load_module(self, module_name: str) -> ModuleType | None:
        module = sys.modules.get(module_name)
        if module is not None:
            return module
        if not self._may_import(module_name):
            logger.debug("Module %r is not loaded and may not be imported", module_name)
            return None
        try:
            return importlib.import_module(module_name)
        except ImportError as exc:
            logger.debug("Cannot import module %r: %s", module_name, exc)
            return None
