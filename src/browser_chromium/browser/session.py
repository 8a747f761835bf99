"""Lifecycle owner of the browser process and its single active page."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..config import BrowserConfig
from ..errors import BrowserNotFoundError, LaunchFailureError, SessionNotReadyError
from ..models import SessionState
from .base import BrowserHandle, BrowserLauncher, PageDriver
from .locator import ChromiumLocator, default_candidates

LOGGER = logging.getLogger(__name__)


class BrowserSession:
    """Own one browser process and one page, acquired lazily.

    The expensive launch happens at most once per close cycle: ``ensure_ready``
    returns the cached page while the session is ready, and a session that was
    closed (or whose launch failed) acquires a fresh browser on the next call.
    Actions are expected to be issued one at a time; only acquisition itself
    is guarded against overlapping callers.
    """

    def __init__(
        self,
        launcher: BrowserLauncher,
        config: Optional[BrowserConfig] = None,
        locator: Optional[ChromiumLocator] = None,
    ) -> None:
        self._config = config or BrowserConfig()
        self._launcher = launcher
        self._locator = locator or ChromiumLocator(
            default_candidates(self._config.executable_path),
            install_hint=self._config.install_hint,
        )
        self._state = SessionState.UNINITIALIZED
        self._browser: Optional[BrowserHandle] = None
        self._page: Optional[PageDriver] = None
        self._acquire_lock = asyncio.Lock()
        self.acquisition_count = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == SessionState.READY

    async def __aenter__(self) -> "BrowserSession":
        await self.ensure_ready()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def ensure_ready(self) -> PageDriver:
        """Return the active page, launching the browser first if needed."""

        page = self._live_page()
        if page is not None:
            return page
        async with self._acquire_lock:
            page = self._live_page()
            if page is not None:
                return page
            if self._state == SessionState.READY:
                LOGGER.warning("Browser page is no longer usable; relaunching")
                await self._release()
            self._state = SessionState.UNINITIALIZED
            return await self._acquire()

    def active_page(self) -> PageDriver:
        if self._state != SessionState.READY or self._page is None:
            raise SessionNotReadyError(f"Browser session is not ready (state: {self._state.value})")
        return self._page

    async def close(self) -> None:
        """Release the browser if one is held. Safe to call repeatedly."""

        if self._browser is not None:
            LOGGER.debug("Closing browser session")
        await self._release()
        self._state = SessionState.CLOSED

    async def dispose_on_shutdown(self) -> None:
        """Close the session from a shutdown hook; never raises."""

        try:
            await self.close()
        except Exception:
            LOGGER.debug("Ignoring failure while disposing browser session", exc_info=True)
            self._browser = None
            self._page = None
            self._state = SessionState.CLOSED

    async def _acquire(self) -> PageDriver:
        self._state = SessionState.LAUNCHING
        LOGGER.debug("Launching browser session")
        try:
            executable = self._locator.locate()
            browser = self._browser = await self._launcher.launch(executable, self._config)
            page = self._page = await browser.new_page()
        except BrowserNotFoundError:
            await self._abort_launch()
            raise
        except Exception as exc:
            await self._abort_launch()
            raise LaunchFailureError(f"Failed to launch browser: {exc}") from exc
        except BaseException:
            LOGGER.info("Browser launch interrupted; releasing partial resources")
            await self._abort_launch()
            raise
        self._state = SessionState.READY
        self.acquisition_count += 1
        LOGGER.info("Browser session ready (%s)", executable)
        return page

    async def _abort_launch(self) -> None:
        await self._release()
        self._state = SessionState.UNINITIALIZED

    async def _release(self) -> None:
        browser = self._browser
        self._browser = None
        self._page = None
        if browser is None:
            return
        try:
            await browser.close()
        except Exception:
            LOGGER.warning("Failed to close browser cleanly", exc_info=True)

    def _live_page(self) -> Optional[PageDriver]:
        if self._state == SessionState.READY and self._page_alive():
            return self._page
        return None

    def _page_alive(self) -> bool:
        if self._page is None or self._browser is None:
            return False
        return not self._page.is_closed() and self._browser.is_connected()
