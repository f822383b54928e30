# uiauto_pom/plugin.py
"""
@file plugin.py
@brief pytest plugin providing a fresh ObjectContext per test.
"""

from __future__ import annotations

import pytest

from .config import Settings, TimeConfig, load_settings
from .context import ObjectContext
from .registry import ClassRegistry


def pytest_addoption(parser):
    group = parser.getgroup("uiauto-pom")
    group.addoption(
        "--pom-settings",
        action="store",
        default=None,
        help="Path to a uiauto-pom settings YAML (namespaces, waits, defaults).",
    )


@pytest.fixture(scope="session")
def pom_settings(request) -> Settings:
    """Settings for the run, from --pom-settings or defaults."""
    path = request.config.getoption("--pom-settings")
    if path:
        return load_settings(path)
    return Settings()


@pytest.fixture(scope="session")
def pom_registry(pom_settings) -> ClassRegistry:
    """Class registry built from the configured namespaces. Override to register classes directly."""
    return ClassRegistry(pom_settings.namespaces)


@pytest.fixture
def object_context(pom_registry, pom_settings):
    """Per-test ObjectContext with the run's wait settings installed."""
    TimeConfig.install_run_config(pom_settings.build_time_config())
    try:
        yield ObjectContext(pom_registry, pom_settings)
    finally:
        TimeConfig.clear_run_config()
