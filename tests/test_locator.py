from pathlib import Path

import pytest

from browser_chromium.browser.locator import (
    EXECUTABLE_ENV_VAR,
    ChromiumLocator,
    EnvironmentCandidate,
    PathCandidates,
    SearchPathCandidates,
    default_candidates,
)
from browser_chromium.errors import BrowserNotFoundError, ErrorKind


def _make_executable(path: Path) -> Path:
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


def test_path_candidates_return_first_executable(tmp_path: Path) -> None:
    not_executable = tmp_path / "chromium-browser"
    not_executable.write_text("")
    not_executable.chmod(0o644)
    chromium = _make_executable(tmp_path / "chromium")
    chrome = _make_executable(tmp_path / "google-chrome")

    candidates = PathCandidates([tmp_path / "missing", not_executable, chromium, chrome])

    assert candidates() == str(chromium)


def test_path_candidates_skip_directories(tmp_path: Path) -> None:
    directory = tmp_path / "chrome"
    directory.mkdir()

    assert PathCandidates([directory])() is None


def test_locator_probes_candidates_in_order() -> None:
    calls: list[str] = []

    def first() -> None:
        calls.append("first")
        return None

    def second() -> str:
        calls.append("second")
        return "/opt/chrome"

    def third() -> str:
        calls.append("third")
        return "/opt/other"

    assert ChromiumLocator([first, second, third]).locate() == "/opt/chrome"
    assert calls == ["first", "second"]


def test_locator_raises_with_install_hint() -> None:
    locator = ChromiumLocator([lambda: None], install_hint="apt install chromium")

    with pytest.raises(BrowserNotFoundError) as exc_info:
        locator.locate()

    assert exc_info.value.kind is ErrorKind.BROWSER_NOT_FOUND
    assert exc_info.value.install_hint == "apt install chromium"
    assert str(exc_info.value) == "Chrome/Chromium not found. Install with: apt install chromium"


def test_environment_candidate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    chrome = _make_executable(tmp_path / "chrome")
    monkeypatch.setenv(EXECUTABLE_ENV_VAR, str(chrome))
    assert EnvironmentCandidate()() == str(chrome)

    monkeypatch.setenv(EXECUTABLE_ENV_VAR, str(tmp_path / "missing"))
    assert EnvironmentCandidate()() is None

    monkeypatch.delenv(EXECUTABLE_ENV_VAR)
    assert EnvironmentCandidate()() is None


def test_search_path_candidates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "browser_chromium.browser.locator.shutil.which",
        lambda name: "/snap/bin/chromium" if name == "chromium" else None,
    )

    assert SearchPathCandidates()() == "/snap/bin/chromium"
    assert SearchPathCandidates(["google-chrome"])() is None


def test_configured_path_takes_priority(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    configured = _make_executable(tmp_path / "custom-chrome")
    monkeypatch.delenv(EXECUTABLE_ENV_VAR, raising=False)

    locator = ChromiumLocator(default_candidates(configured))

    assert locator.locate() == str(configured)


def test_unusable_configured_path_falls_back(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fallback = _make_executable(tmp_path / "chrome")
    monkeypatch.setenv(EXECUTABLE_ENV_VAR, str(fallback))

    locator = ChromiumLocator(default_candidates(tmp_path / "does-not-exist"))

    assert locator.locate() == str(fallback)
