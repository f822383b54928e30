# uiauto_pom/timinglogger.py
"""
@file timinglogger.py
@brief Opt-in timing events for page readiness waits.

Events go to the ``uiauto_pom.timing`` logger at INFO and to every
registered sink. Nothing is emitted until enable() is called.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

log = logging.getLogger("uiauto_pom.timing")

Sink = Callable[[str], Any]


class TimingLogger:
    """Thread-safe switch and fan-out for readiness timing events."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._sinks: List[Sink] = []

    def add_sink(self, sink: Sink) -> None:
        """Register a callable receiving every formatted event line."""
        with self._lock:
            self._sinks.append(sink)

    def remove_sink(self, sink: Sink) -> None:
        with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log(
        self,
        *,
        event: str,
        page: str,
        status: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Emit one event for page, e.g. event=page_ready page=HomePage elapsed_s=0.4."""
        if not self._enabled:
            return

        parts = [f"[{status.lower()}]", f"event={event}", f"page={page}"]
        for key, value in (metadata or {}).items():
            parts.append(f"{key}={value}")
        line = " ".join(parts)

        log.info(line)
        with self._lock:
            sinks = list(self._sinks)
        for sink in sinks:
            sink(line)


TIMING_LOGGER = TimingLogger()
