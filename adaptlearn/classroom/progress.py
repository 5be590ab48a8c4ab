"""
ProgressStore - Track per-level outcomes and derive which levels are open.

Stores learner progress through a key/value collaborator:
- One record per level, replaced by every completed session
- Unlock state derived from records, never stored
- Persisted as a JSON array under the "levelProgress" key
"""

import json
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from pydantic import ValidationError

from adaptlearn.schemas import LevelAvailability, LevelProgress

from .catalog import LevelCatalog
from .storage import LEVEL_PROGRESS_KEY, KeyValueStore, StorageError


logger = logging.getLogger(__name__)


def derive_unlocks(catalog: LevelCatalog, progress: dict[int, LevelProgress]) -> set[int]:
    """
    Compute the ids of levels that can be started.

    Level 1 is always unlocked; level n > 1 is unlocked iff level n-1
    has a record with completed == True.
    """
    unlocked = set()
    for level in catalog:
        if level.id == 1:
            unlocked.add(level.id)
            continue
        previous = progress.get(level.id - 1)
        if previous is not None and previous.completed:
            unlocked.add(level.id)
    return unlocked


def dump_progress(records: Iterable[LevelProgress]) -> str:
    """Serialize records to the persisted JSON form (ISO-8601 timestamps)."""
    return json.dumps([
        record.model_dump(mode="json", by_alias=True, exclude_none=True)
        for record in records
    ])


def parse_progress(blob: Optional[str]) -> list[LevelProgress]:
    """
    Parse the persisted JSON form back into records.

    Corrupt JSON or a non-list payload yields an empty list; individual
    invalid entries are skipped.
    """
    if not blob:
        return []

    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        logger.warning(f"Discarding corrupt level progress: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Discarding level progress of type {type(data).__name__}, expected list")
        return []

    records = []
    for item in data:
        try:
            records.append(LevelProgress.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid progress record {item!r}: {e}")
    return records


class ProgressStore:
    """
    Own the mapping level_id -> LevelProgress for one learner.

    Persistence is best-effort: read failures fall back to an empty
    mapping, and after a failed write the store keeps working in memory
    only for the rest of the session.
    """

    def __init__(self, catalog: LevelCatalog, storage: KeyValueStore):
        """
        Initialize progress store.

        Args:
            catalog: Level catalog used for thresholds and unlock order
            storage: Key/value collaborator for persistence
        """
        self.catalog = catalog
        self.storage = storage
        self._progress: dict[int, LevelProgress] = {}
        self._unlocked: set[int] = derive_unlocks(catalog, self._progress)
        self._persist_enabled = True

    # -------------------------------------------------------------------------
    # Load / Save
    # -------------------------------------------------------------------------

    def load(self):
        """Load persisted progress. Never raises."""
        try:
            blob = self.storage.get(LEVEL_PROGRESS_KEY)
        except StorageError as e:
            logger.warning(f"Could not read level progress, starting empty: {e}")
            blob = None

        progress = {}
        for record in parse_progress(blob):
            if record.level_id not in self.catalog:
                logger.warning(f"Ignoring progress for unknown level {record.level_id}")
                continue
            progress[record.level_id] = record

        self._progress = progress
        self._refresh_unlocks()
        logger.info(f"Loaded progress for {len(progress)} levels")

    def _save(self):
        if not self._persist_enabled:
            return
        try:
            self.storage.set(LEVEL_PROGRESS_KEY, dump_progress(self.all_progress()))
        except StorageError as e:
            logger.warning(f"Could not save level progress, continuing in memory: {e}")
            self._persist_enabled = False

    def _refresh_unlocks(self):
        self._unlocked = derive_unlocks(self.catalog, self._progress)

    @property
    def persistent(self) -> bool:
        """False once a write has failed this session."""
        return self._persist_enabled

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record_completion(self, level_id: int, score: int, attempts: int):
        """
        Record the outcome of a finished session.

        Replaces any earlier record for the level; nothing accumulates
        across sessions.
        """
        level = self.catalog.get(level_id)
        if level is None:
            logger.warning(f"Ignoring completion for unknown level {level_id}")
            return
        if score < 0 or attempts < 0:
            logger.warning(f"Ignoring completion for level {level_id} with score={score} attempts={attempts}")
            return

        record = LevelProgress(
            level_id=level_id,
            completed=score >= level.required_score,
            score=score,
            attempts=attempts,
            completed_at=datetime.now(timezone.utc),
        )
        self._progress[level_id] = record
        self._refresh_unlocks()
        self._save()

        logger.info(
            f"Level {level_id}: score {score}/{level.question_count}, "
            f"attempts {attempts}, completed={record.completed}"
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def unlocked_levels(self) -> set[int]:
        """Ids of levels that can currently be started."""
        return set(self._unlocked)

    def is_unlocked(self, level_id: int) -> bool:
        return level_id in self._unlocked

    def progress_for(self, level_id: int) -> Optional[LevelProgress]:
        """Get the latest record for a level, or None if never finished."""
        return self._progress.get(level_id)

    def all_progress(self) -> list[LevelProgress]:
        """All records in level order."""
        return [self._progress[level_id] for level_id in sorted(self._progress)]

    def availability(self, level_id: int) -> LevelAvailability:
        """
        Display status for a level.

        The unlock rule is checked first: a level whose predecessor was
        replayed below threshold is LOCKED even if its own record says
        completed.
        """
        if level_id not in self._unlocked:
            return LevelAvailability.LOCKED
        record = self._progress.get(level_id)
        if record is not None and record.completed:
            return LevelAvailability.COMPLETED
        return LevelAvailability.AVAILABLE

    def next_level_id(self, level_id: int) -> Optional[int]:
        """Id of the level after level_id, or None at the end of the catalog."""
        next_id = level_id + 1
        return next_id if next_id in self.catalog else None

    def completed_count(self) -> int:
        return sum(1 for record in self._progress.values() if record.completed)

    def overall_progress(self) -> float:
        """Percentage of catalog levels completed (0-100)."""
        if len(self.catalog) == 0:
            return 0.0
        return self.completed_count() / len(self.catalog) * 100

    def completion_stats(self) -> dict:
        """
        Get completion statistics.

        Returns:
            Dictionary with completion stats
        """
        completed = self.completed_count()
        attempted = len(self._progress)
        total = len(self.catalog)

        return {
            "total_levels": total,
            "completed": completed,
            "attempted": attempted,
            "unlocked": len(self._unlocked),
            "locked": total - len(self._unlocked),
            "completion_percent": round(self.overall_progress(), 1),
        }
