# uiauto_pom/naming.py
"""
@file naming.py
@brief Resolves symbolic object names to classes and accessor names.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Tuple

from .categories import Category, policy_for
from .exceptions import ResolutionError
from .registry import ClassRegistry

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def snake_case(name: str) -> str:
    """'HomeScreen' -> 'home_screen', 'home' -> 'home'."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def camel_case(name: str) -> str:
    """'home_screen_page' -> 'HomeScreenPage'."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def _normalize(name: Any, category: Category) -> str:
    if isinstance(name, Enum):
        name = name.value
    if not isinstance(name, str) or not name.strip():
        raise ResolutionError(name, category.value, details="name must be a non-empty string")
    text = name.strip()
    if not _NAME_PATTERN.match(text):
        raise ResolutionError(name, category.value, details="name must be an identifier")
    return snake_case(text)


def accessor_name(name: Any, category: Any) -> str:
    """Cache key / accessor for name in category, e.g. ('login', page) -> 'login_page'."""
    cat = Category.parse(category)
    return f"{_normalize(name, cat)}_{policy_for(cat).suffix}"


class NameResolver:
    """
    Turns (name, category) into (class, accessor name).

    The class name is the CamelCase form of the accessor name and is looked
    up in the registry under the category.
    """

    def __init__(self, registry: ClassRegistry):
        self.registry = registry

    def resolve(self, name: Any, category: Any) -> Tuple[type, str]:
        cat = Category.parse(category)
        method_name = accessor_name(name, cat)
        class_name = camel_case(method_name)

        cls = self.registry.lookup(cat.value, class_name)
        if cls is None:
            raise ResolutionError(
                name,
                cat.value,
                class_name=class_name,
                searched=self.registry.namespaces(cat.value),
            )
        return cls, method_name
