"""Named tool surface exposed to a hosting agent runtime."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from .errors import UnknownToolError
from .executor.actions import BrowserActions, UpdateCallback
from .executor.normalizer import failure
from .models import (
    ActionKind,
    ActionParams,
    ActionResult,
    ClickParams,
    CloseParams,
    DebugCaptureParams,
    GetTextParams,
    NavigateParams,
    ScreenshotParams,
    ScrollParams,
    TypeParams,
    WaitForParams,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    """Description of one invocable browser tool."""

    name: str
    label: str
    description: str
    kind: ActionKind
    params_model: type[ActionParams]

    def parameters_schema(self) -> dict[str, Any]:
        return self.params_model.model_json_schema(by_alias=True)


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        "browser_navigate", "Navigate", "Navigate browser to a URL",
        ActionKind.NAVIGATE, NavigateParams,
    ),
    ToolSpec(
        "browser_screenshot", "Screenshot", "Take a screenshot of the current page",
        ActionKind.SCREENSHOT, ScreenshotParams,
    ),
    ToolSpec(
        "browser_click", "Click", "Click an element by CSS selector",
        ActionKind.CLICK, ClickParams,
    ),
    ToolSpec(
        "browser_type", "Type", "Type text into an input field",
        ActionKind.TYPE, TypeParams,
    ),
    ToolSpec(
        "browser_get_text", "Get Page Text", "Extract text content from the page",
        ActionKind.GET_TEXT, GetTextParams,
    ),
    ToolSpec(
        "browser_scroll", "Scroll", "Scroll the page",
        ActionKind.SCROLL, ScrollParams,
    ),
    ToolSpec(
        "browser_wait_for", "Wait For Element", "Wait for an element to appear on the page",
        ActionKind.WAIT_FOR, WaitForParams,
    ),
    ToolSpec(
        "browser_debug", "Debug", "Take screenshot and get page info for debugging",
        ActionKind.DEBUG_CAPTURE, DebugCaptureParams,
    ),
    ToolSpec(
        "browser_close", "Close Browser", "Close the browser and cleanup",
        ActionKind.CLOSE, CloseParams,
    ),
)


class BrowserToolkit:
    """Dispatch named tool calls to a single :class:`BrowserActions` executor."""

    def __init__(self, actions: BrowserActions) -> None:
        self._actions = actions
        self._specs = {spec.name: spec for spec in TOOL_SPECS}

    @property
    def actions(self) -> BrowserActions:
        return self._actions

    def specs(self) -> list[ToolSpec]:
        return list(self._specs.values())

    def get_spec(self, name: str) -> ToolSpec:
        try:
            return self._specs[name]
        except KeyError as exc:
            raise KeyError(f"Unknown browser tool: {name}") from exc

    async def invoke(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        signal: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ActionResult:
        """Validate ``params`` for tool ``name`` and execute it."""

        spec = self._specs.get(name)
        if spec is None:
            return failure(UnknownToolError(f"Unknown browser tool: {name}"))
        try:
            validated = spec.params_model.model_validate(dict(params or {}))
        except ValidationError as exc:
            LOGGER.info("Rejected parameters for %s: %s", name, exc)
            return failure(exc)
        handler = getattr(self._actions, spec.kind.value)
        return await handler(validated, signal=signal, on_update=on_update)

    async def on_shutdown(self) -> None:
        """Hook for the host's shutdown notification."""

        await self._actions.session.dispose_on_shutdown()
