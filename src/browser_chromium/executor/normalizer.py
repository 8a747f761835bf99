"""Conversion of action outcomes into the uniform result envelope."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from ..errors import BrowserToolError, ErrorKind
from ..models import ActionResult, ContentItem, TextContent

LOGGER = logging.getLogger(__name__)

TRUNCATION_MARKER = "\n...[truncated]"

_HINTS = {
    ErrorKind.ELEMENT_NOT_FOUND: (
        "Inspect the page with browser_debug and retry with a corrected selector."
    ),
    ErrorKind.WAIT_TIMEOUT: "The element may load later; retry with a longer timeout.",
}


def text(value: str) -> TextContent:
    return TextContent(text=value)


def success(
    content: Iterable[ContentItem],
    details: Optional[Mapping[str, Any]] = None,
) -> ActionResult:
    return ActionResult(content=list(content), details=dict(details or {}), is_error=False)


def classify(exc: BaseException) -> ErrorKind:
    """Map an exception onto the error taxonomy."""

    if isinstance(exc, BrowserToolError):
        return exc.kind
    if isinstance(exc, ValidationError):
        return ErrorKind.INVALID_PARAMETERS
    return ErrorKind.DRIVER_ERROR


def failure(exc: BaseException) -> ActionResult:
    """Build an error envelope. Error envelopes never carry binary payloads."""

    kind = classify(exc)
    if not isinstance(exc, (BrowserToolError, ValidationError)):
        LOGGER.exception("Unexpected failure while executing browser action")
    message = _describe(exc)
    content = [text(f"{kind.value}: {message}")]
    hint = _HINTS.get(kind)
    if hint:
        content.append(text(hint))
    return ActionResult(
        content=content,
        details={"error_kind": kind.value, "message": message},
        is_error=True,
    )


def truncate_text(value: str, max_length: int, marker: str = TRUNCATION_MARKER) -> tuple[str, bool]:
    """Cut ``value`` at ``max_length`` characters, appending ``marker`` when cut."""

    if len(value) <= max_length:
        return value, False
    return value[:max_length] + marker, True


def _describe(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or 'params'}: {error['msg']}"
            for error in exc.errors()
        ]
        return "Invalid parameters (" + "; ".join(problems) + ")"
    return str(exc) or exc.__class__.__name__
