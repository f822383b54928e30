# uiauto_pom/timings.py
"""
@file timings.py
@brief Wait presets and defaults for page readiness.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict


WAIT_FIELDS: Dict[str, Dict[str, Any]] = {
    "page_ready": {"timeout": 15.0, "interval": 0.25, "post_timeout": 0.0},
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "fast": {
        "page_ready": {"timeout": 5.0, "interval": 0.1},
    },
    "slow": {
        "page_ready": {"timeout": 30.0, "interval": 0.5, "post_timeout": 0.2},
    },
    "ci": {
        "page_ready": {"timeout": 45.0, "interval": 0.5, "post_timeout": 0.3},
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Any]:
    preset_key = (preset or "default").lower()
    values: Dict[str, Any] = deepcopy(WAIT_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ValueError(f"Unknown timing preset: {preset}")

    for key, value in overrides.items():
        base = deepcopy(values[key])
        base.update(value)
        values[key] = base

    return values
