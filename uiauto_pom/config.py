# uiauto_pom/config.py
"""
@file config.py
@brief Centralized wait configuration and YAML settings for object resolution.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .timings import WAIT_FIELDS, build_preset_values, list_presets

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "settings.schema.json")


@dataclass
class WaitOptions:
    """Wait settings handed to the readiness capability."""
    timeout: float
    interval: float
    post_timeout: float = 0.0
    timeout_message: Optional[str] = None

    def with_overrides(
        self,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        post_timeout: Optional[float] = None,
        timeout_message: Optional[str] = None,
    ) -> WaitOptions:
        """Create a new options instance with overrides applied."""
        return WaitOptions(
            timeout=timeout if timeout is not None else self.timeout,
            interval=interval if interval is not None else self.interval,
            post_timeout=post_timeout if post_timeout is not None else self.post_timeout,
            timeout_message=timeout_message if timeout_message is not None else self.timeout_message,
        )


class TimeConfig:
    """
    Page readiness wait options for the current thread.

    Lookup order in current(): an active override() block, then the run
    config installed for the test, then the process default.
    """

    page_ready: WaitOptions

    _default_instance: Optional[TimeConfig] = None
    _local = threading.local()
    _lock = threading.Lock()

    def __init__(self, preset: str = "default"):
        for name, values in build_preset_values(preset).items():
            setattr(self, name, WaitOptions(**values))

    def clone(self) -> TimeConfig:
        return deepcopy(self)

    @classmethod
    def build_from(
        cls,
        *,
        preset: str = "default",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TimeConfig:
        """Build a run-scope config: defaults, then preset, then overrides."""
        cfg = cls(preset)
        if overrides:
            _apply_overrides(cfg, overrides)
        return cfg

    @classmethod
    def default(cls) -> TimeConfig:
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls()
        return cls._default_instance

    @classmethod
    def install_run_config(cls, config: TimeConfig) -> None:
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        cls._local.run_config = None

    @classmethod
    def current(cls) -> TimeConfig:
        override = getattr(cls._local, "override", None)
        if override is not None:
            return override
        run_cfg = getattr(cls._local, "run_config", None)
        if run_cfg is not None:
            return run_cfg
        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[TimeConfig, None, None]:
        """Temporarily apply overrides, e.g. override(page_ready={"timeout": 2.0})."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().clone()
        _apply_overrides(new_config, kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Drop the cached default and this thread's run/override state."""
        with cls._lock:
            cls._default_instance = None
        cls._local.override = None
        cls._local.run_config = None


def _apply_overrides(config: TimeConfig, overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key not in WAIT_FIELDS:
            raise ValueError(f"Unknown TimeConfig field: {key}")
        if isinstance(value, WaitOptions):
            setattr(config, key, deepcopy(value))
        elif isinstance(value, dict):
            base: WaitOptions = getattr(config, key)
            setattr(config, key, base.with_overrides(
                timeout=value.get("timeout"),
                interval=value.get("interval"),
                post_timeout=value.get("post_timeout"),
                timeout_message=value.get("timeout_message"),
            ))
        else:
            raise ValueError(f"Invalid override for {key}: {value}")


def available_presets() -> Dict[str, Dict[str, Any]]:
    return list_presets()


@dataclass(frozen=True)
class Settings:
    """
    Resolution settings for one test run.

    namespaces maps a category value ("group", "step", "page") to the
    module paths searched for its classes.
    """
    namespaces: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    await_pages: bool = True
    steps_page_arg: Optional[str] = None
    page_args: Dict[str, Any] = field(default_factory=dict)
    timing_preset: str = "default"
    timing_overrides: Dict[str, Any] = field(default_factory=dict)

    def namespaces_for(self, category: str) -> Tuple[str, ...]:
        return tuple(self.namespaces.get(category, ()))

    def build_time_config(self) -> TimeConfig:
        """Build the run-scope timing snapshot these settings describe."""
        try:
            return TimeConfig.build_from(
                preset=self.timing_preset,
                overrides=self.timing_overrides,
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e


def _load_schema(path: str = SCHEMA_PATH) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_settings(data: Dict[str, Any]) -> None:
    """Validate a raw settings mapping against the bundled JSON schema."""
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = ["Settings schema validation failed:"]
        for e in errors:
            lines.append(f"- {list(e.path)}: {e.message}")
        raise ConfigError("\n".join(lines))


def parse_settings(data: Optional[Dict[str, Any]]) -> Settings:
    """Build Settings from an already-loaded mapping."""
    data = data or {}
    validate_settings(data)

    namespaces: Dict[str, Tuple[str, ...]] = {}
    for category, modules in (data.get("namespaces") or {}).items():
        if isinstance(modules, str):
            modules = [modules]
        namespaces[category] = tuple(modules)

    timing = data.get("timing") or {}
    settings = Settings(
        namespaces=namespaces,
        await_pages=bool(data.get("await_pages", True)),
        steps_page_arg=data.get("steps_page_arg"),
        page_args=dict(data.get("page_args") or {}),
        timing_preset=str(timing.get("preset", "default")),
        timing_overrides=dict(timing.get("overrides") or {}),
    )
    # unknown presets and wait fields raise ConfigError here
    settings.build_time_config()
    return settings


def load_settings(path: str) -> Settings:
    """Load settings YAML from disk."""
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise ConfigError(f"Settings YAML not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Settings YAML must be a mapping at root.")
    return parse_settings(data)
