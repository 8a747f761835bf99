"""Driver capability abstractions the session and executor operate on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..config import BrowserConfig


class ElementRef(ABC):
    """Handle to a single resolved element on the active page."""

    @abstractmethod
    async def click(self, *, click_count: int = 1) -> None:
        """Click the element."""

    @abstractmethod
    async def type(self, text: str) -> None:
        """Type text into the element, key by key."""

    @abstractmethod
    async def press(self, key: str) -> None:
        """Press a single key while the element is focused."""

    @abstractmethod
    async def text_content(self) -> str:
        """Return the element's text content."""

    @abstractmethod
    async def screenshot(self) -> bytes:
        """Return a PNG capture of the element."""


class PageDriver(ABC):
    """The single active page of a browser session."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Current page URL."""

    @abstractmethod
    async def title(self) -> str:
        """Return the document title."""

    @abstractmethod
    async def goto(self, url: str, *, wait_until: str, timeout_ms: Optional[float] = None) -> None:
        """Navigate and wait for ``wait_until`` (``networkidle`` or ``domcontentloaded``)."""

    @abstractmethod
    async def query(self, selector: str) -> Optional[ElementRef]:
        """Return the first element matching ``selector`` or ``None``."""

    @abstractmethod
    async def click_and_wait_for_navigation(self, element: ElementRef) -> None:
        """Click ``element`` and wait for the navigation it triggers."""

    @abstractmethod
    async def screenshot(self, *, full_page: bool = False) -> bytes:
        """Return a PNG capture of the viewport or the full page."""

    @abstractmethod
    async def body_text(self) -> str:
        """Return the rendered text of the document body."""

    @abstractmethod
    async def content(self) -> str:
        """Return the serialized HTML of the page."""

    @abstractmethod
    async def scroll_by(self, delta: int) -> None:
        """Scroll vertically by ``delta`` pixels."""

    @abstractmethod
    async def scroll_to(self, position: int) -> None:
        """Scroll vertically to an absolute offset."""

    @abstractmethod
    async def scroll_height(self) -> int:
        """Return the scrollable height of the document."""

    @abstractmethod
    async def scroll_position(self) -> int:
        """Return the current vertical scroll offset."""

    @abstractmethod
    async def wait_for_selector(self, selector: str, *, timeout_ms: float) -> None:
        """Wait until ``selector`` matches, raising ``WaitTimeoutError`` on timeout."""

    @abstractmethod
    def is_closed(self) -> bool:
        """Return whether the page has been closed or crashed."""


class BrowserHandle(ABC):
    """A running browser process."""

    @abstractmethod
    async def new_page(self) -> PageDriver:
        """Open a page configured with the session's viewport and user agent."""

    @abstractmethod
    async def close(self) -> None:
        """Terminate the browser process and release driver resources."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Return whether the browser process is still reachable."""


class BrowserLauncher(ABC):
    """Factory that starts a browser process from an executable path."""

    @abstractmethod
    async def launch(self, executable_path: str, config: BrowserConfig) -> BrowserHandle:
        """Start the browser at ``executable_path`` using ``config``."""
