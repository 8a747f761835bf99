"""Browser actions executed against the session's active page."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..browser.base import ElementRef, PageDriver
from ..browser.session import BrowserSession
from ..config import ActionDefaults, BrowserConfig
from ..errors import ActionCancelledError, ElementNotFoundError
from ..models import (
    ActionKind,
    ActionParams,
    ActionResult,
    ClickParams,
    CloseParams,
    DebugCaptureParams,
    GetTextParams,
    ImageContent,
    NavigateParams,
    ScreenshotParams,
    ScrollDirection,
    ScrollParams,
    TypeParams,
    WaitForParams,
)
from .instrumentation import ActionInstrumentation, NullInstrumentation
from .normalizer import failure, success, text, truncate_text

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound=ActionParams)

UpdateCallback = Callable[[ActionResult], None]
Operation = Callable[[PageDriver, P], Awaitable[ActionResult]]


class BrowserActions:
    """Execute actions one at a time against a :class:`BrowserSession`.

    Every action lazily readies the session, runs against the active page and
    returns an :class:`ActionResult`. Failures of the action itself come back
    as error envelopes; only acquisition failures (no browser executable, or a
    launch that did not complete) propagate to the caller.
    """

    def __init__(
        self,
        session: BrowserSession,
        *,
        defaults: Optional[ActionDefaults] = None,
        browser_config: Optional[BrowserConfig] = None,
        instrumentation: Optional[ActionInstrumentation] = None,
    ) -> None:
        self._session = session
        self._defaults = defaults or ActionDefaults()
        self._browser_config = browser_config or BrowserConfig()
        self._instrumentation = instrumentation or NullInstrumentation()

    @property
    def session(self) -> BrowserSession:
        return self._session

    async def navigate(
        self,
        params: NavigateParams,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, f"Navigating to {params.url}...")
        return await self._run(ActionKind.NAVIGATE, params, self._navigate, signal)

    async def screenshot(
        self,
        params: Optional[ScreenshotParams] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, "Taking screenshot...")
        return await self._run(
            ActionKind.SCREENSHOT, params or ScreenshotParams(), self._screenshot, signal
        )

    async def click(
        self,
        params: ClickParams,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, f"Clicking: {params.selector}...")
        return await self._run(ActionKind.CLICK, params, self._click, signal)

    async def type(
        self,
        params: TypeParams,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, f"Typing into: {params.selector}...")
        return await self._run(ActionKind.TYPE, params, self._type, signal)

    async def get_text(
        self,
        params: Optional[GetTextParams] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, "Reading page text...")
        return await self._run(
            ActionKind.GET_TEXT, params or GetTextParams(), self._get_text, signal
        )

    async def scroll(
        self,
        params: Optional[ScrollParams] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        params = params or ScrollParams()
        _progress(on_update, f"Scrolling {params.direction.value}...")
        return await self._run(ActionKind.SCROLL, params, self._scroll, signal)

    async def wait_for(
        self,
        params: WaitForParams,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, f"Waiting for: {params.selector}...")
        return await self._run(ActionKind.WAIT_FOR, params, self._wait_for, signal)

    async def debug_capture(
        self,
        params: Optional[DebugCaptureParams] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, "Capturing debug info...")
        return await self._run(
            ActionKind.DEBUG_CAPTURE, params or DebugCaptureParams(), self._debug_capture, signal
        )

    async def close(
        self,
        params: Optional[CloseParams] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        _progress(on_update, "Closing browser...")
        await self._session.close()
        result = success([text("Browser closed")], {})
        self._instrumentation.on_action(ActionKind.CLOSE, params or CloseParams(), result)
        return result

    async def resolve(self, selector: str) -> ElementRef:
        """Return the element matching ``selector`` on the active page."""

        element = await self._session.active_page().query(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        return element

    async def _run(
        self,
        kind: ActionKind,
        params: P,
        operation: Operation[P],
        signal: Optional[asyncio.Event],
    ) -> ActionResult:
        LOGGER.info("Executing browser action %s", kind.value)
        if signal is not None and signal.is_set():
            result = failure(ActionCancelledError(f"{kind.value} cancelled before it started"))
        else:
            result = await self._execute(kind, params, operation, signal)
        self._instrumentation.on_action(kind, params, result)
        return result

    async def _execute(
        self,
        kind: ActionKind,
        params: P,
        operation: Operation[P],
        signal: Optional[asyncio.Event],
    ) -> ActionResult:
        try:
            page = await _cancellable(self._session.ensure_ready(), signal, kind)
        except ActionCancelledError as exc:
            LOGGER.info("Browser action %s cancelled while launching", kind.value)
            return failure(exc)
        try:
            return await _cancellable(operation(page, params), signal, kind)
        except Exception as exc:
            LOGGER.info("Browser action %s failed: %s", kind.value, exc)
            return failure(exc)

    async def _navigate(self, page: PageDriver, params: NavigateParams) -> ActionResult:
        wait_until = "networkidle" if params.wait_for_load else "domcontentloaded"
        await page.goto(
            params.url,
            wait_until=wait_until,
            timeout_ms=self._browser_config.navigation_timeout_ms,
        )
        title = await page.title()
        url = page.url
        return success(
            [text(f"Loaded: {title}"), text(f"URL: {url}")],
            {"title": title, "url": url},
        )

    async def _screenshot(self, page: PageDriver, params: ScreenshotParams) -> ActionResult:
        if params.selector:
            element = await self.resolve(params.selector)
            data = await element.screenshot()
            caption = f"Screenshot of element: {params.selector}"
        else:
            data = await page.screenshot(full_page=params.full_page)
            caption = "Full page screenshot" if params.full_page else "Viewport screenshot"
        return success(
            [text(caption), ImageContent(data=data)],
            {"fullPage": params.full_page, "selector": params.selector},
        )

    async def _click(self, page: PageDriver, params: ClickParams) -> ActionResult:
        element = await self.resolve(params.selector)
        if params.wait_for_navigation:
            await page.click_and_wait_for_navigation(element)
        else:
            await element.click()
        url = page.url
        return success(
            [text(f"Clicked: {params.selector}"), text(f"Current URL: {url}")],
            {"selector": params.selector, "url": url},
        )

    async def _type(self, page: PageDriver, params: TypeParams) -> ActionResult:
        element = await self.resolve(params.selector)
        if params.clear_first:
            await element.click(click_count=3)
            await element.press("Backspace")
        await element.type(params.text)
        if params.press_enter:
            await element.press("Enter")
        limit = self._defaults.type_echo_length
        echo = params.text[:limit] + ("..." if len(params.text) > limit else "")
        return success(
            [text(f"Typed into: {params.selector}"), text(f"Text: {echo}")],
            {"selector": params.selector, "textLength": len(params.text)},
        )

    async def _get_text(self, page: PageDriver, params: GetTextParams) -> ActionResult:
        if params.selector:
            element = await self.resolve(params.selector)
            full_text = await element.text_content()
        else:
            full_text = await page.body_text()
        max_length = params.max_length or self._defaults.text_max_length
        shown, truncated = truncate_text(full_text, max_length)
        return success(
            [text(shown)],
            {"length": len(full_text), "truncated": truncated, "url": page.url},
        )

    async def _scroll(self, page: PageDriver, params: ScrollParams) -> ActionResult:
        amount = params.amount if params.amount is not None else self._defaults.scroll_amount
        if params.direction == ScrollDirection.DOWN:
            await page.scroll_by(amount)
        elif params.direction == ScrollDirection.UP:
            await page.scroll_by(-amount)
        elif params.direction == ScrollDirection.BOTTOM:
            await page.scroll_to(await page.scroll_height())
        else:
            await page.scroll_to(0)
        position = await page.scroll_position()
        return success(
            [text(f"Scrolled {params.direction.value} (position: {position}px)")],
            {"direction": params.direction.value, "scrollPosition": position},
        )

    async def _wait_for(self, page: PageDriver, params: WaitForParams) -> ActionResult:
        timeout = params.timeout if params.timeout is not None else self._defaults.wait_timeout_ms
        await page.wait_for_selector(params.selector, timeout_ms=timeout)
        return success(
            [text(f"Element appeared: {params.selector}")],
            {"selector": params.selector},
        )

    async def _debug_capture(self, page: PageDriver, params: DebugCaptureParams) -> ActionResult:
        screenshot = await page.screenshot(full_page=True)
        title = await page.title()
        url = page.url
        content: list[Any] = [
            text("Debug Info:"),
            text(f"Title: {title}"),
            text(f"URL: {url}"),
            ImageContent(data=screenshot),
        ]
        if params.include_html:
            html = await page.content()
            preview, _ = truncate_text(html, self._defaults.html_preview_length)
            content.append(text(f"HTML preview:\n{preview}"))
        return success(content, {"title": title, "url": url})


async def _cancellable(
    awaitable: Awaitable[T],
    signal: Optional[asyncio.Event],
    kind: ActionKind,
) -> T:
    """Await ``awaitable`` unless ``signal`` fires first, then abort it."""

    if signal is None:
        return await awaitable
    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(signal.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        waiter.cancel()
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise
    waiter.cancel()
    if task in done:
        return task.result()
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
    raise ActionCancelledError(f"{kind.value} cancelled")


def _progress(on_update: Optional[UpdateCallback], message: str) -> None:
    if on_update is not None:
        on_update(success([text(message)]))
