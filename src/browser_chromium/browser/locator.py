"""Lookup of a usable Chromium-family browser executable."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from ..errors import BrowserNotFoundError

LOGGER = logging.getLogger(__name__)

WELL_KNOWN_PATHS = (
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
    "/usr/bin/google-chrome",
    "/usr/bin/google-chrome-stable",
    "/usr/bin/chrome",
)

EXECUTABLE_NAMES = (
    "chromium-browser",
    "chromium",
    "google-chrome",
    "google-chrome-stable",
    "chrome",
)

EXECUTABLE_ENV_VAR = "BROWSER_CHROMIUM_EXECUTABLE"
DEFAULT_INSTALL_HINT = "sudo dnf install chromium"

Candidate = Callable[[], Optional[str]]


def is_executable(path: str | Path) -> bool:
    candidate = Path(path)
    return candidate.is_file() and os.access(candidate, os.X_OK)


class PathCandidates:
    """Probe a fixed, ordered list of filesystem paths."""

    def __init__(self, paths: Sequence[str | Path] = WELL_KNOWN_PATHS) -> None:
        self._paths = list(paths)

    def __call__(self) -> Optional[str]:
        for path in self._paths:
            if is_executable(path):
                return str(path)
        return None

    def __repr__(self) -> str:
        return f"PathCandidates({self._paths!r})"


class SearchPathCandidates:
    """Resolve executable names against ``PATH``."""

    def __init__(self, names: Sequence[str] = EXECUTABLE_NAMES) -> None:
        self._names = list(names)

    def __call__(self) -> Optional[str]:
        for name in self._names:
            resolved = shutil.which(name)
            if resolved:
                return resolved
        return None

    def __repr__(self) -> str:
        return f"SearchPathCandidates({self._names!r})"


class EnvironmentCandidate:
    """Read an executable path from an environment variable."""

    def __init__(self, variable: str = EXECUTABLE_ENV_VAR) -> None:
        self._variable = variable

    def __call__(self) -> Optional[str]:
        value = os.environ.get(self._variable)
        if not value:
            return None
        if not is_executable(value):
            LOGGER.warning("%s points to %s which is not executable", self._variable, value)
            return None
        return value

    def __repr__(self) -> str:
        return f"EnvironmentCandidate({self._variable!r})"


class ChromiumLocator:
    """Return the first executable produced by an ordered list of candidates."""

    def __init__(
        self,
        candidates: Optional[Iterable[Candidate]] = None,
        *,
        install_hint: str = DEFAULT_INSTALL_HINT,
    ) -> None:
        if candidates is None:
            candidates = default_candidates()
        self._candidates = list(candidates)
        self._install_hint = install_hint

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    def locate(self) -> str:
        for candidate in self._candidates:
            found = candidate()
            if found:
                LOGGER.debug("Located browser executable %s via %r", found, candidate)
                return found
        raise BrowserNotFoundError("Chrome/Chromium not found", install_hint=self._install_hint)


def default_candidates(configured_path: Optional[Path] = None) -> list[Candidate]:
    """Build the standard lookup order, with an explicit path first when given."""

    candidates: list[Candidate] = []
    if configured_path is not None:
        candidates.append(_ConfiguredPath(configured_path))
    candidates.extend(
        [
            EnvironmentCandidate(),
            PathCandidates(),
            SearchPathCandidates(),
        ]
    )
    return candidates


class _ConfiguredPath:
    def __init__(self, path: Path) -> None:
        self._path = path

    def __call__(self) -> Optional[str]:
        if is_executable(self._path):
            return str(self._path)
        LOGGER.warning("Configured browser executable %s is not usable; probing defaults", self._path)
        return None

    def __repr__(self) -> str:
        return f"ConfiguredPath({str(self._path)!r})"
