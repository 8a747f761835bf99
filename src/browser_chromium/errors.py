"""Error taxonomy shared by the session and the action executor."""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Categories every reported failure is classified into."""

    BROWSER_NOT_FOUND = "BrowserNotFound"
    LAUNCH_FAILURE = "LaunchFailure"
    SESSION_NOT_READY = "SessionNotReady"
    ELEMENT_NOT_FOUND = "ElementNotFound"
    NAVIGATION_FAILURE = "NavigationFailure"
    WAIT_TIMEOUT = "WaitTimeout"
    CANCELLED = "Cancelled"
    INVALID_PARAMETERS = "InvalidParameters"
    DRIVER_ERROR = "DriverError"


class BrowserToolError(RuntimeError):
    """Base class for failures raised by the browser tool."""

    kind: ErrorKind = ErrorKind.DRIVER_ERROR


class BrowserNotFoundError(BrowserToolError):
    """Raised when no usable browser executable could be located."""

    kind = ErrorKind.BROWSER_NOT_FOUND

    def __init__(self, message: str, install_hint: Optional[str] = None) -> None:
        if install_hint:
            message = f"{message}. Install with: {install_hint}"
        super().__init__(message)
        self.install_hint = install_hint


class LaunchFailureError(BrowserToolError):
    """Raised when the browser process or its page could not be acquired."""

    kind = ErrorKind.LAUNCH_FAILURE


class SessionNotReadyError(BrowserToolError):
    """Raised when the active page is requested outside the ready state."""

    kind = ErrorKind.SESSION_NOT_READY


class ElementNotFoundError(BrowserToolError):
    """Raised when a selector does not match any element on the page."""

    kind = ErrorKind.ELEMENT_NOT_FOUND

    def __init__(self, selector: str) -> None:
        super().__init__(f"Element not found: {selector}")
        self.selector = selector


class NavigationFailureError(BrowserToolError):
    """Raised when the driver fails to navigate to a URL."""

    kind = ErrorKind.NAVIGATION_FAILURE


class WaitTimeoutError(BrowserToolError):
    """Raised when an awaited element does not appear in time."""

    kind = ErrorKind.WAIT_TIMEOUT

    def __init__(self, selector: str, timeout_ms: float) -> None:
        super().__init__(f"Timed out after {timeout_ms:g}ms waiting for: {selector}")
        self.selector = selector
        self.timeout_ms = timeout_ms


class ActionCancelledError(BrowserToolError):
    """Raised when the caller's cancellation signal fires mid-action."""

    kind = ErrorKind.CANCELLED


class DriverError(BrowserToolError):
    """Raised when the underlying browser driver reports a failure."""

    kind = ErrorKind.DRIVER_ERROR


class UnknownToolError(BrowserToolError):
    """Raised when a host requests a tool name that is not registered."""

    kind = ErrorKind.INVALID_PARAMETERS
