"""Playwright-powered implementation of the driver capability."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Error,
    Page,
    Playwright,
    async_playwright,
)
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import BrowserConfig
from ..errors import DriverError, NavigationFailureError, WaitTimeoutError
from .base import BrowserHandle, BrowserLauncher, ElementRef, PageDriver

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def _driver_errors() -> AsyncIterator[None]:
    try:
        yield
    except Error as exc:
        raise DriverError(str(exc)) from exc


class PlaywrightElement(ElementRef):
    """Element handle backed by Playwright."""

    def __init__(self, handle: ElementHandle) -> None:
        self._handle = handle

    @property
    def handle(self) -> ElementHandle:
        return self._handle

    async def click(self, *, click_count: int = 1) -> None:
        async with _driver_errors():
            await self._handle.click(click_count=click_count)

    async def type(self, text: str) -> None:
        async with _driver_errors():
            await self._handle.type(text)

    async def press(self, key: str) -> None:
        async with _driver_errors():
            await self._handle.press(key)

    async def text_content(self) -> str:
        async with _driver_errors():
            return await self._handle.text_content() or ""

    async def screenshot(self) -> bytes:
        async with _driver_errors():
            return await self._handle.screenshot(type="png")


class PlaywrightPage(PageDriver):
    """Active page backed by Playwright."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def title(self) -> str:
        async with _driver_errors():
            return await self._page.title()

    async def goto(self, url: str, *, wait_until: str, timeout_ms: Optional[float] = None) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except Error as exc:
            raise NavigationFailureError(f"Failed to navigate to {url}: {exc}") from exc

    async def query(self, selector: str) -> Optional[ElementRef]:
        async with _driver_errors():
            handle = await self._page.query_selector(selector)
        if handle is None:
            return None
        return PlaywrightElement(handle)

    async def click_and_wait_for_navigation(self, element: ElementRef) -> None:
        try:
            async with self._page.expect_navigation(wait_until="networkidle"):
                await element.click()
        except Error as exc:
            raise NavigationFailureError(f"Navigation after click failed: {exc}") from exc

    async def screenshot(self, *, full_page: bool = False) -> bytes:
        async with _driver_errors():
            return await self._page.screenshot(full_page=full_page, type="png")

    async def body_text(self) -> str:
        async with _driver_errors():
            return await self._page.evaluate("() => document.body ? document.body.innerText : ''")

    async def content(self) -> str:
        async with _driver_errors():
            return await self._page.content()

    async def scroll_by(self, delta: int) -> None:
        async with _driver_errors():
            await self._page.evaluate("(y) => window.scrollBy(0, y)", delta)

    async def scroll_to(self, position: int) -> None:
        async with _driver_errors():
            await self._page.evaluate("(y) => window.scrollTo(0, y)", position)

    async def scroll_height(self) -> int:
        async with _driver_errors():
            return int(await self._page.evaluate("() => document.body.scrollHeight"))

    async def scroll_position(self) -> int:
        async with _driver_errors():
            return int(await self._page.evaluate("() => window.scrollY"))

    async def wait_for_selector(self, selector: str, *, timeout_ms: float) -> None:
        try:
            await self._page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(selector, timeout_ms) from exc
        except Error as exc:
            raise DriverError(str(exc)) from exc

    def is_closed(self) -> bool:
        return self._page.is_closed()


class PlaywrightBrowser(BrowserHandle):
    """Running Chromium process started through Playwright."""

    def __init__(self, playwright: Playwright, browser: Browser, config: BrowserConfig) -> None:
        self._playwright = playwright
        self._browser = browser
        self._config = config
        self._context: Optional[BrowserContext] = None

    async def new_page(self) -> PageDriver:
        async with _driver_errors():
            if self._context is None:
                self._context = await self._browser.new_context(
                    viewport={
                        "width": self._config.viewport_width,
                        "height": self._config.viewport_height,
                    },
                    user_agent=self._config.user_agent,
                )
            page = await self._context.new_page()
        return PlaywrightPage(page)

    async def close(self) -> None:
        LOGGER.debug("Closing Playwright browser")
        try:
            if self._context:
                await self._context.close()
        finally:
            try:
                await self._browser.close()
            finally:
                await self._playwright.stop()
        self._context = None

    def is_connected(self) -> bool:
        return self._browser.is_connected()


class PlaywrightLauncher(BrowserLauncher):
    """Launch Chromium-family executables with Playwright."""

    async def launch(self, executable_path: str, config: BrowserConfig) -> BrowserHandle:
        LOGGER.debug("Starting Playwright with executable %s", executable_path)
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                executable_path=executable_path,
                headless=config.headless,
                args=list(config.launch_args),
            )
        except BaseException:
            await playwright.stop()
            raise
        return PlaywrightBrowser(playwright, browser, config)
