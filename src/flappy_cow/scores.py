"""Best-score persistence.

The best score survives across sessions and process restarts. It is read
once at startup (0 if absent) and written through immediately whenever a
session ends with a new high score. Storage failures are logged and never
reach the simulation.
"""

import json
import logging
import time
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ScoreStore:
    """Interface for best-score storage."""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, best_score: int) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    """Keeps the best score in memory only (tests, headless runs)."""

    def __init__(self, best_score: int = 0):
        self.best_score = best_score
        self.writes = 0

    def load(self) -> int:
        return self.best_score

    def save(self, best_score: int) -> None:
        self.best_score = best_score
        self.writes += 1


class HighScoreStore(ScoreStore):
    """Keeps the best score in a small JSON file.

    Usage:
        store = HighScoreStore("~/.flappy_cow/highscore.json")
        best = store.load()
        ...
        store.save(new_best)
    """

    VERSION = 1

    def __init__(self, path: str = "~/.flappy_cow/highscore.json"):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        """Read the stored best score, 0 if missing or unreadable."""
        if not self.path.exists():
            return 0
        try:
            with open(self.path) as f:
                data = json.load(f)
            return max(0, int(data.get("best_score", 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not read best score from %s: %s", self.path, exc)
            return 0

    def save(self, best_score: int) -> None:
        """Write the best score through to disk."""
        data: Dict[str, Any] = {
            "version": self.VERSION,
            "best_score": int(best_score),
            "updated": time.time(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            logger.error("Could not write best score to %s: %s", self.path, exc)

    def read_raw(self) -> Optional[Dict[str, Any]]:
        """Stored document as-is, None if missing."""
        if not self.path.exists():
            return None
        with open(self.path) as f:
            return json.load(f)
