"""Factories for constructing components from configuration."""

from __future__ import annotations

from typing import Optional

from .browser.base import BrowserLauncher
from .browser.locator import ChromiumLocator, default_candidates
from .browser.playwright_driver import PlaywrightLauncher
from .browser.session import BrowserSession
from .config import BrowserConfig, ToolkitConfig
from .executor.actions import BrowserActions
from .executor.instrumentation import ActionInstrumentation
from .tools import BrowserToolkit


def build_locator(config: BrowserConfig) -> ChromiumLocator:
    return ChromiumLocator(
        default_candidates(config.executable_path),
        install_hint=config.install_hint,
    )


def build_launcher(config: BrowserConfig) -> BrowserLauncher:
    return PlaywrightLauncher()


def build_session(config: BrowserConfig) -> BrowserSession:
    return BrowserSession(
        build_launcher(config),
        config=config,
        locator=build_locator(config),
    )


def build_toolkit(
    config: Optional[ToolkitConfig] = None,
    *,
    instrumentation: Optional[ActionInstrumentation] = None,
) -> BrowserToolkit:
    config = config or ToolkitConfig()
    actions = BrowserActions(
        build_session(config.browser),
        defaults=config.actions,
        browser_config=config.browser,
        instrumentation=instrumentation,
    )
    return BrowserToolkit(actions)
