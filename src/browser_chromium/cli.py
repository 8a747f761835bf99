"""Command line interface for browser-chromium."""

from __future__ import annotations

import asyncio
import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
import yaml

from .config import load_config
from .errors import BrowserNotFoundError, BrowserToolError
from .executor.instrumentation import ArtifactRecorder
from .factory import build_locator, build_toolkit
from .reporting import ConsoleReporter
from .tools import BrowserToolkit

app = typer.Typer(help="Headless Chromium session tools")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("browser-chromium"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def locate(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    executable: Annotated[
        Optional[Path],
        typer.Option("--executable", help="Explicit browser executable to check first."),
    ] = None,
) -> None:
    """Print the browser executable a session would launch."""

    overrides: dict[str, Any] = {}
    if executable is not None:
        overrides["browser"] = {"executable_path": str(executable)}
    config = load_config(config_path, **overrides)
    try:
        path = build_locator(config.browser).locate()
    except BrowserNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(path)


@app.command()
def run(
    script: Annotated[
        Path,
        typer.Argument(help="YAML list of steps, each with 'tool' and optional 'params'."),
    ],
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option("--env-file", help="Path to an .env file with default configuration values."),
    ] = None,
    artifacts: Annotated[
        Optional[Path],
        typer.Option("--artifacts", help="Directory to store screenshots in."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
    executable: Annotated[
        Optional[Path],
        typer.Option("--executable", help="Browser executable to launch."),
    ] = None,
) -> None:
    """Run a scripted sequence of browser tool calls."""

    steps = yaml.safe_load(script.read_text()) or []
    if not isinstance(steps, list):
        raise typer.BadParameter("Script must contain a list of steps", param_hint="SCRIPT")
    for number, step in enumerate(steps, start=1):
        if not isinstance(step, dict) or not isinstance(step.get("tool"), str):
            raise typer.BadParameter(
                f"Step {number} must be a mapping with a tool name", param_hint="SCRIPT"
            )
        if not isinstance(step.get("params") or {}, dict):
            raise typer.BadParameter(f"Step {number} params must be a mapping", param_hint="SCRIPT")

    overrides: dict[str, Any] = {}
    if headless is not None or executable is not None:
        overrides.setdefault("browser", {})
        if headless is not None:
            overrides["browser"]["headless"] = headless
        if executable is not None:
            overrides["browser"]["executable_path"] = str(executable)
    if artifacts is not None:
        overrides["artifact_dir"] = str(artifacts)

    config = load_config(config_path, env_file=env_file, **overrides)
    recorder = ArtifactRecorder(config.artifact_dir)
    toolkit = build_toolkit(config, instrumentation=recorder)
    reporter = ConsoleReporter()

    try:
        success = asyncio.run(_run_steps(toolkit, steps, reporter))
    except BrowserToolError as exc:
        typer.echo(f"{exc.kind.value}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    for path in recorder.list_artifacts():
        typer.echo(f"Saved {path}")
    if not success:
        raise typer.Exit(code=1)


async def _run_steps(
    toolkit: BrowserToolkit,
    steps: list[dict[str, Any]],
    reporter: ConsoleReporter,
) -> bool:
    success = True
    try:
        for step in steps:
            name = step["tool"]
            result = await toolkit.invoke(
                name,
                step.get("params") or {},
                on_update=reporter.progress,
            )
            reporter.report(name, result)
            if result.is_error:
                success = False
                break
    finally:
        await toolkit.on_shutdown()
    return success


if __name__ == "__main__":
    app()
