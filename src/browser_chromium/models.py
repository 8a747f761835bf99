"""Shared models used across the browser tool."""

from __future__ import annotations

import base64
import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SessionState(str, enum.Enum):
    """Lifecycle states of a browser session."""

    UNINITIALIZED = "uninitialized"
    LAUNCHING = "launching"
    READY = "ready"
    CLOSED = "closed"


class ActionKind(str, enum.Enum):
    """Enumerated operations the executor can perform."""

    NAVIGATE = "navigate"
    SCREENSHOT = "screenshot"
    CLICK = "click"
    TYPE = "type"
    GET_TEXT = "get_text"
    SCROLL = "scroll"
    WAIT_FOR = "wait_for"
    DEBUG_CAPTURE = "debug_capture"
    CLOSE = "close"


class ScrollDirection(str, enum.Enum):
    """Directions accepted by the scroll action."""

    DOWN = "down"
    UP = "up"
    BOTTOM = "bottom"
    TOP = "top"


class ActionParams(BaseModel):
    """Base class for action parameters.

    Fields accept both their snake_case names and camelCase aliases so hosts
    can pass either ``wait_for_load`` or ``waitForLoad``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class NavigateParams(ActionParams):
    url: str = Field(min_length=1, description="URL to navigate to")
    wait_for_load: bool = Field(
        default=True,
        description="Wait for full page load including network idle",
    )


class ScreenshotParams(ActionParams):
    full_page: bool = Field(default=False, description="Capture the full scrollable page")
    selector: Optional[str] = Field(
        default=None,
        description="CSS selector to screenshot specific element only",
    )


class ClickParams(ActionParams):
    selector: str = Field(min_length=1, description="CSS selector of element to click")
    wait_for_navigation: bool = Field(
        default=False,
        description="Wait for page navigation after click",
    )


class TypeParams(ActionParams):
    selector: str = Field(min_length=1, description="CSS selector for input field")
    text: str = Field(description="Text to type")
    clear_first: bool = Field(default=True, description="Clear the field before typing")
    press_enter: bool = Field(default=False, description="Press Enter after typing")


class GetTextParams(ActionParams):
    selector: Optional[str] = Field(
        default=None,
        description="Get text from specific element only",
    )
    max_length: Optional[int] = Field(
        default=None,
        gt=0,
        description="Maximum characters to return (default: 10000)",
    )


class ScrollParams(ActionParams):
    direction: ScrollDirection = Field(
        default=ScrollDirection.DOWN,
        description="Direction to scroll",
    )
    amount: Optional[int] = Field(
        default=None,
        ge=0,
        description="Pixels to scroll (default: 800, ignored for top/bottom)",
    )


class WaitForParams(ActionParams):
    selector: str = Field(min_length=1, description="CSS selector to wait for")
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Timeout in milliseconds (default: 5000)",
    )


class DebugCaptureParams(ActionParams):
    include_html: bool = Field(default=True, description="Include HTML snippet in output")


class CloseParams(ActionParams):
    pass


class TextContent(BaseModel):
    """Text segment of an action result."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Binary image payload of an action result."""

    model_config = ConfigDict(ser_json_bytes="base64")

    type: Literal["image"] = "image"
    data: bytes
    mime_type: str = "image/png"

    def as_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


ContentItem = Union[TextContent, ImageContent]


class ActionResult(BaseModel):
    """Uniform result envelope returned by every action."""

    content: list[ContentItem] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    is_error: bool = False

    @property
    def text(self) -> str:
        """All text segments joined by newlines."""

        return "\n".join(item.text for item in self.content if isinstance(item, TextContent))

    @property
    def images(self) -> list[ImageContent]:
        return [item for item in self.content if isinstance(item, ImageContent)]
