from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, Union

LOG = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    def __init__(self, score: int = 0) -> None:
        self.score = int(score)

    def load(self) -> int:
        return self.score

    def save(self, score: int) -> None:
        self.score = int(score)


class FileHighScoreStore:
    """Keeps the best score as a single integer in a text file."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return 0
        try:
            return max(0, int(text))
        except ValueError:
            LOG.warning("ignoring malformed high score file %s", self.path)
            return 0

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(f"{int(score)}\n", encoding="utf-8")
        os.replace(tmp, self.path)
