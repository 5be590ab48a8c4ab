"""
AdaptiveDifficulty - Standalone difficulty dial for free practice.

Separate from the level system. Difficulty runs 1..3, goes up after two
correct answers in a row and down after any miss, and is persisted under
the "difficulty" key.
"""

import logging

from .storage import DIFFICULTY_KEY, KeyValueStore, StorageError


logger = logging.getLogger(__name__)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 3
STREAK_TO_RAISE = 2


class AdaptiveDifficulty:
    """Difficulty tracker driven by answer correctness."""

    def __init__(self, storage: KeyValueStore):
        self.storage = storage
        self.level = MIN_DIFFICULTY
        self.streak = 0

    def load(self) -> int:
        """Load the stored difficulty; anything unreadable falls back to 1."""
        try:
            raw = self.storage.get(DIFFICULTY_KEY)
        except StorageError as e:
            logger.warning(f"Could not read difficulty: {e}")
            raw = None

        try:
            value = int(raw) if raw is not None else MIN_DIFFICULTY
        except ValueError:
            logger.warning(f"Discarding invalid stored difficulty {raw!r}")
            value = MIN_DIFFICULTY

        self.level = max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, value))
        self.streak = 0
        return self.level

    def record_answer(self, correct: bool) -> int:
        """
        Update difficulty after an answer.

        Returns:
            The new difficulty level
        """
        if correct:
            self.streak += 1
            if self.streak >= STREAK_TO_RAISE:
                self.level = min(MAX_DIFFICULTY, self.level + 1)
                self.streak = 0
        else:
            self.level = max(MIN_DIFFICULTY, self.level - 1)
            self.streak = 0

        self._save()
        return self.level

    def _save(self):
        try:
            self.storage.set(DIFFICULTY_KEY, str(self.level))
        except StorageError as e:
            logger.warning(f"Could not save difficulty: {e}")
