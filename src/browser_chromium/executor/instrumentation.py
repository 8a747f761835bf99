"""Helpers for recording executed actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol

from ..models import ActionKind, ActionParams, ActionResult

LOGGER = logging.getLogger(__name__)


class ActionInstrumentation(Protocol):
    """Protocol for receiving a callback after every action."""

    def on_action(self, kind: ActionKind, params: ActionParams, result: ActionResult) -> None:
        """Record that a browser action completed (successfully or not)."""


@dataclass
class NullInstrumentation:
    """No-op implementation used when no recorder is configured."""

    def on_action(self, kind: ActionKind, params: ActionParams, result: ActionResult) -> None:
        pass


@dataclass
class ActionRecord:
    """Record of an executed action and the artifacts it produced."""

    index: int
    kind: ActionKind
    params: ActionParams
    is_error: bool
    artifact_paths: List[Path] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ArtifactRecorder:
    """Keep a log of actions and write image payloads to a directory."""

    def __init__(self, artifact_dir: Optional[Path] = None) -> None:
        self._artifact_dir = artifact_dir
        self.records: List[ActionRecord] = []

    def on_action(self, kind: ActionKind, params: ActionParams, result: ActionResult) -> None:
        record = ActionRecord(
            index=len(self.records) + 1,
            kind=kind,
            params=params,
            is_error=result.is_error,
        )
        if self._artifact_dir is not None:
            for offset, image in enumerate(result.images):
                path = self._artifact_dir / f"{record.index:03d}-{kind.value}-{offset}.png"
                try:
                    self._artifact_dir.mkdir(parents=True, exist_ok=True)
                    path.write_bytes(image.data)
                except OSError:
                    LOGGER.exception("Failed to store artifact %s", path)
                    continue
                record.artifact_paths.append(path)
        self.records.append(record)

    def list_artifacts(self) -> List[Path]:
        return [path for record in self.records for path in record.artifact_paths]
