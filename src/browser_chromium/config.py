"""Configuration models for the browser tool."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=IsolateOrigins,site-per-process",
]


class BrowserConfig(BaseModel):
    """Settings for launching the browser process."""

    executable_path: Optional[Path] = Field(
        default=None,
        description="Explicit browser executable, probed before the well-known locations.",
    )
    headless: bool = True
    viewport_width: int = Field(default=1920, gt=0)
    viewport_height: int = Field(default=1080, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    launch_args: list[str] = Field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))
    navigation_timeout_ms: Optional[float] = Field(
        default=None,
        description="Navigation timeout; the driver default applies when unset.",
    )
    install_hint: str = "sudo dnf install chromium"


class ActionDefaults(BaseModel):
    """Default values applied when action parameters are omitted."""

    text_max_length: int = Field(default=10000, gt=0)
    scroll_amount: int = Field(default=800, ge=0)
    wait_timeout_ms: float = Field(default=5000, ge=0)
    html_preview_length: int = Field(default=3000, gt=0)
    type_echo_length: int = Field(default=50, gt=0)


class ToolkitConfig(BaseSettings):
    """Top-level configuration for the browser toolkit."""

    model_config = SettingsConfigDict(
        env_prefix="BROWSER_CHROMIUM_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    actions: ActionDefaults = Field(default_factory=ActionDefaults)
    artifact_dir: Optional[Path] = Field(
        default=None,
        description="Directory where image payloads are stored, if any.",
    )


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> ToolkitConfig:
    """Build the toolkit configuration.

    Sources apply in increasing priority: field defaults, the environment and
    ``.env`` file, the YAML file at ``path``, then keyword ``overrides``.
    Nested sections such as ``browser`` merge key by key, so a YAML file that
    sets ``browser.viewport_width`` keeps ``browser.headless`` from the
    environment.
    """

    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    merged = ToolkitConfig(**settings_kwargs).model_dump(mode="python")
    if path:
        import yaml

        _merge_sections(merged, yaml.safe_load(path.read_text()) or {})
    _merge_sections(merged, overrides)
    return ToolkitConfig.model_validate(merged)


def _merge_sections(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    for key, value in updates.items():
        section = target.get(key)
        if isinstance(value, Mapping) and isinstance(section, dict):
            _merge_sections(section, value)
        else:
            target[key] = value
