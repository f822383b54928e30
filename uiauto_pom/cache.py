# uiauto_pom/cache.py
"""
@file cache.py
@brief Per-context instance cache with a pluggable validation rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .categories import Category

log = logging.getLogger(__name__)

ValidationRule = Callable[[Any, Tuple[Any, ...], Dict[str, Any]], bool]

_EMPTY = object()


def always_reuse(cached: Any, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> bool:
    """
    Default rule: a filled slot is always valid. Only consulted for filled slots.

    Arguments of later calls are accepted but never force a rebuild, so an
    accessor behaves as a per-context singleton once built.
    """
    return True


@dataclass
class Slot:
    """Boxed cached instance for one accessor."""
    accessor_name: str
    category: Category
    value: Any = _EMPTY

    @property
    def filled(self) -> bool:
        return self.value is not _EMPTY


class InstanceCache:
    """
    Accessor name -> Slot mapping owned by one context.

    Slots are created on first use and never removed. Only their values
    are replaced, and a replaced value is dropped without finalization.
    """

    def __init__(self, rule: Optional[ValidationRule] = None):
        self._slots: Dict[str, Slot] = {}
        self._rule: ValidationRule = rule or always_reuse

    @property
    def rule(self) -> ValidationRule:
        return self._rule

    def install(self, accessor_name: str, category: Category) -> Slot:
        """Create the slot for accessor_name unless it already exists."""
        slot = self._slots.get(accessor_name)
        if slot is None:
            slot = Slot(accessor_name, category)
            self._slots[accessor_name] = slot
            log.debug("Installed accessor %s", accessor_name)
        return slot

    def get_or_create(
        self,
        accessor_name: str,
        category: Category,
        factory: Callable[[], Any],
        args: Tuple[Any, ...] = (),
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Return the cached instance if the rule accepts it, else build one.

        If factory raises, the slot keeps its previous value.
        """
        slot = self.install(accessor_name, category)
        if slot.filled and self._rule(slot.value, args, kwargs or {}):
            log.debug("Cache hit for %s", accessor_name)
            return slot.value

        instance = factory()
        slot.value = instance
        return instance

    def peek(self, accessor_name: str, default: Any = None) -> Any:
        """Cached value for accessor_name without building anything."""
        slot = self._slots.get(accessor_name)
        if slot is None or not slot.filled:
            return default
        return slot.value

    def accessors(self) -> List[str]:
        return list(self._slots)

    def __contains__(self, accessor_name: object) -> bool:
        return accessor_name in self._slots
