# uiauto_pom/readiness.py
"""
@file readiness.py
@brief Default readiness capability for page objects.

A page object opts into waiting by defining one of:

- await_ready(options): full control, called once
- assert_ready(): raises AssertionError until the page is usable
- is_ready(): returns truthy once the page is usable

Objects defining none of them are ready as soon as they are built.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Tuple

from .config import WaitOptions
from .exceptions import ReadinessTimeoutError
from .exceptions import TimeoutError as WaitTimeoutError
from .timinglogger import TIMING_LOGGER

Readiness = Callable[[Any, WaitOptions], Any]


def _poll(
    probe: Callable[[], Any],
    page_name: str,
    options: WaitOptions,
    retry_on: Tuple[type, ...],
) -> int:
    """
    Call probe until it returns truthy or options.timeout runs out.

    Exceptions in retry_on count as "not ready yet"; the last one becomes
    the timeout's original_exception. Returns the number of attempts.
    """
    start = time.monotonic()
    attempts = 0
    last_error: Optional[BaseException] = None

    while True:
        attempts += 1
        try:
            if probe():
                return attempts
            last_error = None
        except retry_on as e:
            last_error = e

        elapsed = time.monotonic() - start
        time_left = options.timeout - elapsed
        if time_left <= 0:
            TIMING_LOGGER.log(
                event="page_ready_timeout",
                page=page_name,
                status="error",
                metadata={"attempts": attempts, "elapsed_s": round(elapsed, 3)},
            )
            raise ReadinessTimeoutError(
                page_name,
                timeout=options.timeout,
                message=options.timeout_message,
                cause=last_error,
                attempts=attempts,
                elapsed=elapsed,
            )
        time.sleep(min(options.interval, time_left))


def _passes(check: Callable[[], Any]) -> Callable[[], bool]:
    def probe() -> bool:
        check()
        return True
    return probe


def await_ready(instance: Any, options: WaitOptions) -> Any:
    """Block until instance reports ready, or raise ReadinessTimeoutError."""
    page_name = type(instance).__name__
    start = time.monotonic()
    attempts = 1

    TIMING_LOGGER.log(
        event="page_ready_start",
        page=page_name,
        metadata={"timeout_s": options.timeout, "interval_s": options.interval},
    )

    if callable(getattr(instance, "await_ready", None)):
        instance.await_ready(options)
    elif callable(getattr(instance, "assert_ready", None)):
        attempts = _poll(_passes(instance.assert_ready), page_name, options, (AssertionError,))
    elif callable(getattr(instance, "is_ready", None)):
        attempts = _poll(instance.is_ready, page_name, options, (Exception,))

    if options.post_timeout > 0:
        time.sleep(options.post_timeout)

    TIMING_LOGGER.log(
        event="page_ready",
        page=page_name,
        status="success",
        metadata={"attempts": attempts, "elapsed_s": round(time.monotonic() - start, 3)},
    )
    return instance


def check_readiness(readiness: Readiness, instance: Any, options: WaitOptions) -> Any:
    """
    Run a readiness capability against a freshly built instance.

    Any timeout it raises, this package's or the builtin one, surfaces as
    ReadinessTimeoutError. Other errors propagate unchanged.
    """
    try:
        readiness(instance, options)
    except ReadinessTimeoutError:
        raise
    except (WaitTimeoutError, TimeoutError) as e:
        raise ReadinessTimeoutError(
            type(instance).__name__,
            timeout=options.timeout,
            message=options.timeout_message,
            cause=e,
        ) from e
    return instance
