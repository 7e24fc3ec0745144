"""
High Score Store
================

Persistence for the best payout across games.

The game only needs two operations from a store: load the previous high
score (or None when there is none) and save a new one. FileHighScoreStore
keeps it in a single-line text file; InMemoryHighScoreStore is for tests
and headless simulation.

Dependencies:
    - portalocker: Cross-platform file locking
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Protocol, Union

import portalocker

from deal_game.deal_core.errors import CorruptHighScoreDataError, WriteFailureError

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Storage for the persisted high score."""

    def load_previous_high_score(self) -> Optional[float]:
        """Return the stored high score, or None if nothing is stored."""
        ...

    def save_high_score(self, value: float) -> None:
        """Replace the stored high score."""
        ...


def parse_high_score(content: str) -> float:
    """
    Parse the text content of a high score file.

    Args:
        content: File content. Must hold exactly one non-negative number.

    Returns:
        The parsed score.

    Raises:
        CorruptHighScoreDataError: If content is not a single valid score.
    """
    tokens = content.split()
    if len(tokens) != 1:
        raise CorruptHighScoreDataError(
            f"Expected a single number, found {len(tokens)} tokens"
        )

    try:
        value = float(tokens[0])
    except ValueError as e:
        raise CorruptHighScoreDataError(f"Not a number: {tokens[0]!r}") from e

    if not math.isfinite(value) or value < 0:
        raise CorruptHighScoreDataError(f"High score must be a non-negative number, got {tokens[0]!r}")

    return value


class FileHighScoreStore:
    """
    High score kept in a single-line text file.

    Reads take a shared lock and writes an exclusive lock, so separate
    processes sharing the file never see a half-written score.
    """

    def __init__(self, path: Union[str, Path] = "highscore.txt"):
        """
        Initialize file store.

        Args:
            path: Path to the high score file. It need not exist yet.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the high score file."""
        return self._path

    def load_previous_high_score(self) -> Optional[float]:
        """
        Read the stored high score.

        Returns:
            The stored score, or None if the file doesn't exist.

        Raises:
            CorruptHighScoreDataError: If the file exists but can't be read
                or doesn't hold a single non-negative number.
        """
        if not self._path.exists():
            logger.debug(f"No high score file at {self._path}")
            return None

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                portalocker.lock(f, portalocker.LOCK_SH)
                try:
                    content = f.read()
                finally:
                    portalocker.unlock(f)
        except OSError as e:
            raise CorruptHighScoreDataError(f"Could not read {self._path}: {e}") from e

        try:
            return parse_high_score(content)
        except CorruptHighScoreDataError as e:
            raise CorruptHighScoreDataError(f"Incorrect content in {self._path}: {e}") from e

    def save_high_score(self, value: float) -> None:
        """
        Overwrite the stored high score.

        Args:
            value: New high score.

        Raises:
            WriteFailureError: If the file can't be written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            # Not truncated until the lock is held
            with open(self._path, "a+", encoding="utf-8") as f:
                portalocker.lock(f, portalocker.LOCK_EX)
                try:
                    f.seek(0)
                    f.truncate()
                    f.write(repr(float(value)))
                    f.flush()
                finally:
                    portalocker.unlock(f)
        except (OSError, portalocker.LockException) as e:
            raise WriteFailureError(f"Could not open {self._path} for writing: {e}") from e

        logger.debug(f"Wrote high score {value} to {self._path.name}")

    def __repr__(self) -> str:
        return f"FileHighScoreStore(path={str(self._path)!r})"


class InMemoryHighScoreStore:
    """High score held in memory. Records every save for inspection."""

    def __init__(self, initial: Optional[float] = None):
        """
        Initialize in-memory store.

        Args:
            initial: Score reported as previously stored. None for no score.
        """
        self._value = initial
        self.saved: List[float] = []

    def load_previous_high_score(self) -> Optional[float]:
        return self._value

    def save_high_score(self, value: float) -> None:
        self._value = value
        self.saved.append(value)
