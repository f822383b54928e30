# uiauto_pom/exceptions.py
"""
@file exceptions.py
@brief Custom exception classes for page/step/group object resolution.
"""

from __future__ import annotations
from typing import List, Optional


class PomError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(PomError):
    """Raised when YAML settings or timing values are invalid."""
    pass


class TimeoutError(PomError):
    """
    Raised when a wait/retry times out.

    This exception preserves the original exception that caused the timeout,
    making debugging significantly easier.

    Attributes:
        original_exception: The last exception that was raised before timeout
        description: Human-readable description of what was being waited for
        timeout: The timeout value in seconds
        attempt_count: Number of attempts made (if applicable)
        elapsed_time: Actual elapsed time in seconds (if applicable)
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.original_exception: Optional[BaseException] = None
        self.description: Optional[str] = None
        self.timeout: Optional[float] = None
        self.attempt_count: Optional[int] = None
        self.elapsed_time: Optional[float] = None
        self.stage: Optional[str] = None

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.original_exception is not None:
            details.append(f"Original exception: {type(self.original_exception).__name__}")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")
        if self.stage is not None:
            details.append(f"Stage: {self.stage}")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg

    def get_root_cause(self) -> Optional[BaseException]:
        """
        Get the root cause exception by traversing the chain.

        @return The deepest original_exception in the chain, or None
        """
        current = self.original_exception
        while current is not None:
            if getattr(current, "original_exception", None) is not None:
                current = current.original_exception
            else:
                return current
        return None


class ReadinessTimeoutError(TimeoutError):
    """
    Raised when a page object did not become ready within its wait window.

    Carries the poll count and elapsed time of the wait. When it wraps a
    TimeoutError raised by a readiness capability, that error's wait metadata
    is copied instead.
    """

    def __init__(
        self,
        page_name: str,
        accessor_name: Optional[str] = None,
        timeout: Optional[float] = None,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
        attempts: Optional[int] = None,
        elapsed: Optional[float] = None,
    ):
        self.page_name = page_name
        self.accessor_name = accessor_name
        text = message or f"Page '{page_name}' was not ready after {timeout}s"
        super().__init__(text)
        self.timeout = timeout
        self.stage = "page_ready"
        self.description = f"{page_name} ready"
        self.attempt_count = attempts
        self.elapsed_time = elapsed
        if isinstance(cause, TimeoutError):
            self.original_exception = cause.original_exception
            self.description = cause.description
            self.attempt_count = cause.attempt_count
            self.elapsed_time = cause.elapsed_time
            if cause.timeout is not None:
                self.timeout = cause.timeout
        elif cause is not None:
            self.original_exception = cause


class ResolutionError(PomError):
    """
    Raised when a symbolic name has no matching class in its category.

    Contains the searched namespaces so the missing class can be located.
    """

    def __init__(
        self,
        name: object,
        category: str,
        class_name: Optional[str] = None,
        searched: Optional[List[str]] = None,
        details: Optional[str] = None,
    ):
        self.name = name
        self.category = category
        self.class_name = class_name
        self.searched = list(searched or [])
        self.details = details
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"no {self.category} class for name={self.name!r}"
        if self.class_name:
            base += f" class='{self.class_name}'"
        if self.details:
            base += f" details='{self.details}'"
        if self.searched:
            base += f" searched={self.searched}"
        return base


class ConstructionError(PomError, TypeError):
    """Raised when a resolved class cannot accept the shaped arguments."""

    def __init__(self, class_name: str, details: str):
        self.class_name = class_name
        self.details = details
        super().__init__(f"{class_name} cannot take the given arguments: {details}")
