from __future__ import annotations

import asyncio
from typing import Callable, Optional

import pytest

from browser_chromium.browser.base import BrowserHandle, BrowserLauncher, ElementRef, PageDriver
from browser_chromium.browser.locator import ChromiumLocator
from browser_chromium.browser.session import BrowserSession
from browser_chromium.config import BrowserConfig
from browser_chromium.errors import NavigationFailureError, WaitTimeoutError
from browser_chromium.executor.actions import BrowserActions

PNG_BYTES = b"\x89PNG\r\n\x1a\nstub-image"


class StubElement(ElementRef):
    def __init__(self, text: str = "", navigates_to: Optional[str] = None) -> None:
        self.text = text
        self.navigates_to = navigates_to
        self.clicks: list[int] = []
        self.typed: list[str] = []
        self.presses: list[str] = []
        self.value = ""

    async def click(self, *, click_count: int = 1) -> None:
        self.clicks.append(click_count)

    async def type(self, text: str) -> None:
        self.typed.append(text)
        self.value += text

    async def press(self, key: str) -> None:
        self.presses.append(key)
        if key == "Backspace":
            self.value = ""

    async def text_content(self) -> str:
        return self.text

    async def screenshot(self) -> bytes:
        return PNG_BYTES


class StubPage(PageDriver):
    def __init__(
        self,
        *,
        body: str = "Hello world",
        html: str = "<html><body>Hello world</body></html>",
        document_height: int = 5000,
        viewport_height: int = 1080,
    ) -> None:
        self._url = "about:blank"
        self.page_title = ""
        self.body = body
        self.html = html
        self.elements: dict[str, StubElement] = {}
        self.slow_selectors: set[str] = set()
        self.failing_urls: set[str] = set()
        self.titles: dict[str, str] = {}
        self.document_height = document_height
        self.viewport_height = viewport_height
        self.scroll_y = 0
        self.closed = False
        self.visits: list[tuple[str, str]] = []
        self.screenshots: list[bool] = []

    @property
    def url(self) -> str:
        return self._url

    @property
    def max_scroll(self) -> int:
        return max(self.document_height - self.viewport_height, 0)

    async def title(self) -> str:
        return self.page_title

    async def goto(self, url: str, *, wait_until: str, timeout_ms: Optional[float] = None) -> None:
        if url in self.failing_urls:
            raise NavigationFailureError(f"Failed to navigate to {url}: net::ERR_NAME_NOT_RESOLVED")
        self.visits.append((url, wait_until))
        self._url = url
        self.page_title = self.titles.get(url, "Example Domain")

    async def query(self, selector: str) -> Optional[ElementRef]:
        return self.elements.get(selector)

    async def click_and_wait_for_navigation(self, element: ElementRef) -> None:
        await element.click()
        assert isinstance(element, StubElement)
        if element.navigates_to:
            self._url = element.navigates_to

    async def screenshot(self, *, full_page: bool = False) -> bytes:
        self.screenshots.append(full_page)
        return PNG_BYTES

    async def body_text(self) -> str:
        return self.body

    async def content(self) -> str:
        return self.html

    async def scroll_by(self, delta: int) -> None:
        self._scroll(self.scroll_y + delta)

    async def scroll_to(self, position: int) -> None:
        self._scroll(position)

    async def scroll_height(self) -> int:
        return self.document_height

    async def scroll_position(self) -> int:
        return self.scroll_y

    async def wait_for_selector(self, selector: str, *, timeout_ms: float) -> None:
        if selector in self.elements:
            return
        if selector in self.slow_selectors:
            await asyncio.Event().wait()
        await asyncio.sleep(timeout_ms / 1000)
        raise WaitTimeoutError(selector, timeout_ms)

    def is_closed(self) -> bool:
        return self.closed

    def _scroll(self, position: int) -> None:
        self.scroll_y = min(max(position, 0), self.max_scroll)


class StubBrowser(BrowserHandle):
    def __init__(
        self,
        page: StubPage,
        *,
        fail_new_page: bool = False,
        hold_new_page: bool = False,
        opening: Optional[asyncio.Event] = None,
    ) -> None:
        self.page = page
        self.fail_new_page = fail_new_page
        self.hold_new_page = hold_new_page
        self.opening = opening or asyncio.Event()
        self.closed = False
        self.connected = True
        self.close_error: Optional[Exception] = None

    async def new_page(self) -> PageDriver:
        self.opening.set()
        if self.hold_new_page:
            await asyncio.Event().wait()
        if self.fail_new_page:
            raise RuntimeError("page crashed while opening")
        return self.page

    async def close(self) -> None:
        self.closed = True
        self.connected = False
        if self.close_error is not None:
            raise self.close_error

    def is_connected(self) -> bool:
        return self.connected


class StubLauncher(BrowserLauncher):
    def __init__(self, page_factory: Callable[[], StubPage] = StubPage) -> None:
        self.page_factory = page_factory
        self.browsers: list[StubBrowser] = []
        self.executables: list[str] = []
        self.fail_launch = False
        self.fail_new_page = False
        self.hold_launch = False
        self.hold_new_page = False
        self.launching = asyncio.Event()
        self.opening_page = asyncio.Event()

    async def launch(self, executable_path: str, config: BrowserConfig) -> BrowserHandle:
        self.executables.append(executable_path)
        self.launching.set()
        if self.hold_launch:
            await asyncio.Event().wait()
        if self.fail_launch:
            raise RuntimeError("chromium exited with code 1")
        browser = StubBrowser(
            self.page_factory(),
            fail_new_page=self.fail_new_page,
            hold_new_page=self.hold_new_page,
            opening=self.opening_page,
        )
        self.browsers.append(browser)
        return browser

    @property
    def current(self) -> StubBrowser:
        return self.browsers[-1]


@pytest.fixture
def launcher() -> StubLauncher:
    return StubLauncher()


@pytest.fixture
def locator() -> ChromiumLocator:
    return ChromiumLocator([lambda: "/usr/bin/chromium"])


@pytest.fixture
def session(launcher: StubLauncher, locator: ChromiumLocator) -> BrowserSession:
    return BrowserSession(launcher, locator=locator)


@pytest.fixture
def actions(session: BrowserSession) -> BrowserActions:
    return BrowserActions(session)
