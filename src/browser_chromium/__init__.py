"""Controllable headless Chromium sessions driven by structured commands."""

from .browser.session import BrowserSession
from .executor.actions import BrowserActions
from .models import ActionResult, SessionState
from .tools import BrowserToolkit

__all__ = ["ActionResult", "BrowserActions", "BrowserSession", "BrowserToolkit", "SessionState"]
