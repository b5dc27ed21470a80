# src/game/highscore.py
"""
Best-score persistence: one integer under one key in a small JSON file.
Anything unreadable counts as "no best score yet" (0).
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Union
from .config import BEST_SCORE_FILE, BEST_SCORE_KEY

logger = logging.getLogger(__name__)


class BestScoreStore:
    def __init__(self, path: Union[str, Path] = BEST_SCORE_FILE, key: str = BEST_SCORE_KEY):
        self.path = Path(path)
        self.key = key

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = int(data.get(self.key, 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable best score in %s: %s", self.path, e)
            return 0
        return max(0, value)

    def save(self, value: int) -> None:
        """Write `value`, keeping any other keys already in the file."""
        data = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}
        data[self.key] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not persist best score to %s: %s", self.path, e)
