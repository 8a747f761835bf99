"""Console rendering of action results."""

from __future__ import annotations

from typing import Optional

from rich.console import Console

from .models import ActionResult, ImageContent, TextContent


class ConsoleReporter:
    """Print action results to the console using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()

    def progress(self, result: ActionResult) -> None:
        self._console.print(result.text, style="dim", markup=False, highlight=False)

    def report(self, name: str, result: ActionResult) -> None:
        style = "red" if result.is_error else "green"
        label = "ERROR" if result.is_error else "OK"
        self._console.print(f"[{label}] {name}", style=style, markup=False)
        for item in result.content:
            if isinstance(item, TextContent):
                self._console.print(item.text, markup=False, highlight=False)
            elif isinstance(item, ImageContent):
                self._console.print(
                    f"<{item.mime_type}, {len(item.data)} bytes>",
                    style="cyan",
                    markup=False,
                )
        if result.details:
            self._console.print(result.details, style="dim")
