# uiauto_pom/__init__.py
"""
UIAuto POM - lazy page, step and group object resolution for UI tests.

This package provides:
- ObjectContext: per-test cache resolving objects by symbolic name
- ClassRegistry / NameResolver: name -> class resolution
- Category policies: construction rules for groups, steps and pages
- TimeConfig / Settings: wait presets and YAML settings
- await_ready: default page readiness check polling the page's own hooks
"""

from uiauto_pom.cache import InstanceCache, always_reuse
from uiauto_pom.categories import Category, CategoryPolicy, ObjectType, POLICIES, policy_for
from uiauto_pom.config import Settings, TimeConfig, WaitOptions, load_settings, parse_settings
from uiauto_pom.context import ObjectContext, ObjectsMixin
from uiauto_pom.exceptions import (
    PomError,
    ConfigError,
    TimeoutError,
    ReadinessTimeoutError,
    ResolutionError,
    ConstructionError,
)
from uiauto_pom.naming import NameResolver, accessor_name
from uiauto_pom.readiness import await_ready
from uiauto_pom.registry import ClassRegistry

__all__ = [
    "InstanceCache",
    "always_reuse",
    "Category",
    "CategoryPolicy",
    "ObjectType",
    "POLICIES",
    "policy_for",
    "Settings",
    "TimeConfig",
    "WaitOptions",
    "load_settings",
    "parse_settings",
    "ObjectContext",
    "ObjectsMixin",
    "PomError",
    "ConfigError",
    "TimeoutError",
    "ReadinessTimeoutError",
    "ResolutionError",
    "ConstructionError",
    "NameResolver",
    "accessor_name",
    "await_ready",
    "ClassRegistry",
]

__version__ = "1.0.0"
