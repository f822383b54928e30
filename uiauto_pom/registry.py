# uiauto_pom/registry.py
"""
@file registry.py
@brief Class registry for page, step and group object classes.

Classes are found either through explicit registration or by attribute
lookup in the module namespaces configured for their category.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import ConfigError

log = logging.getLogger(__name__)


class ClassRegistry:
    """
    Maps (category, class name) to constructible classes.

    Explicit registrations win over namespace lookups. Namespaces are
    searched in the order they were added.
    """

    def __init__(self, namespaces: Optional[Dict[str, Iterable[str]]] = None):
        self._classes: Dict[Tuple[str, str], type] = {}
        self._namespaces: Dict[str, List[str]] = {}
        for category, modules in (namespaces or {}).items():
            for module in modules:
                self.add_namespace(category, module)

    def add_namespace(self, category: str, module: str) -> None:
        modules = self._namespaces.setdefault(category, [])
        if module not in modules:
            modules.append(module)

    def namespaces(self, category: str) -> List[str]:
        return list(self._namespaces.get(category, []))

    def register(self, category: str, cls: type, name: Optional[str] = None) -> type:
        """Register cls under its own name (or name) for category."""
        if not inspect.isclass(cls):
            raise TypeError(f"Only classes can be registered, got: {type(cls).__name__}")
        key = (category, name or cls.__name__)
        self._classes[key] = cls
        log.debug("Registered %s class %s", category, key[1])
        return cls

    def lookup(self, category: str, class_name: str) -> Optional[type]:
        """Return the class for class_name in category, or None."""
        cls = self._classes.get((category, class_name))
        if cls is not None:
            return cls

        for module_name in self._namespaces.get(category, []):
            module = self._import(module_name)
            candidate = getattr(module, class_name, None)
            if inspect.isclass(candidate):
                return candidate
        return None

    @staticmethod
    def _import(module_name: str):
        try:
            return importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigError(f"Cannot import namespace module '{module_name}': {e}") from e
