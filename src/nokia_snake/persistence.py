"""High-score storage backends."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snakeHighScore"


class HighScoreStore(Protocol):
    """Key-value persistence for a single non-negative high score."""

    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Process-local store, used by tests and ephemeral sessions."""

    def __init__(self, initial: int = 0) -> None:
        self.value = max(0, int(initial))
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score
        self.writes += 1


class JsonHighScoreStore:
    """Stores the high score under *key* in a JSON object on disk.

    Other keys in the file are preserved on write. Any read problem
    yields 0 and any write problem is logged; neither is raised, so an
    unusable storage location never interrupts play.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path).expanduser()
        self.key = key

    def _read_all(self) -> dict:
        try:
            raw = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring non-object high-score file %s.", self.path)
            return {}
        return raw

    def load(self) -> int:
        value = self._read_all().get(self.key, 0)
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            logger.warning("Ignoring malformed high score %r.", value)
            return 0
        try:
            score = int(value)
        except ValueError:
            logger.warning("Ignoring malformed high score %r.", value)
            return 0
        if score < 0:
            logger.warning("Ignoring negative high score %d.", score)
            return 0
        return score

    def save(self, score: int) -> None:
        data = self._read_all()
        data[self.key] = int(score)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2))
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
            return
        logger.debug("High score %d saved to %s.", score, self.path)
