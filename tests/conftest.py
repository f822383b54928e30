"""
Shared fixtures for uiauto_pom tests.
"""

import pytest

import sample_objects
from uiauto_pom.config import TimeConfig, WaitOptions
from uiauto_pom.context import ObjectContext
from uiauto_pom.registry import ClassRegistry
from uiauto_pom.timinglogger import TIMING_LOGGER


@pytest.fixture(autouse=True)
def reset_state():
    """Clear recorded constructions and thread-local timing state."""
    sample_objects.CREATED.clear()
    TimeConfig.reset_to_defaults()
    yield
    TimeConfig.reset_to_defaults()
    TIMING_LOGGER.disable()


@pytest.fixture
def registry():
    """Registry searching sample_objects for every category."""
    return ClassRegistry({
        "group": ["sample_objects"],
        "step": ["sample_objects"],
        "page": ["sample_objects"],
    })


class ReadinessRecorder:
    """Readiness capability that records what it was asked to await."""

    def __init__(self):
        self.calls = []

    def __call__(self, instance, options):
        self.calls.append((instance, options))
        return instance

    @property
    def instances(self):
        return [instance for instance, _ in self.calls]


@pytest.fixture
def readiness():
    return ReadinessRecorder()


@pytest.fixture
def ctx(registry, readiness):
    """ObjectContext with recorded readiness and short waits."""
    return ObjectContext(
        registry,
        readiness=readiness,
        wait_options=WaitOptions(timeout=1.0, interval=0.05),
    )
