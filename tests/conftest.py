"""Shared fixtures for adaptlearn tests."""

from typing import Optional

import pytest

from adaptlearn.classroom import LevelCatalog, MemoryStore, ProgressStore, StorageError
from adaptlearn.schemas import Level, Question


def make_level(level_id: int, required_score: int, question_count: int) -> Level:
    """Level whose questions all have option 0 as the right answer."""
    questions = [
        Question(
            prompt=f"L{level_id} Q{i + 1}",
            options=["right", "wrong", "also wrong"],
            answer_index=0,
            explanation=f"Because L{level_id} Q{i + 1}",
        )
        for i in range(question_count)
    ]
    return Level(
        id=level_id,
        title=f"Level {level_id}",
        required_score=required_score,
        questions=questions,
    )


class FailingStore:
    """Store whose reads and/or writes always fail."""

    def __init__(self, fail_get: bool = True, fail_set: bool = True):
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.writes = 0
        self.data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StorageError("read failed")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        if self.fail_set:
            raise StorageError("write failed")
        self.data[key] = value


@pytest.fixture
def catalog() -> LevelCatalog:
    return LevelCatalog([
        make_level(1, required_score=2, question_count=2),
        make_level(2, required_score=3, question_count=3),
        make_level(3, required_score=3, question_count=3),
    ])


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def store(catalog, storage) -> ProgressStore:
    progress = ProgressStore(catalog, storage)
    progress.load()
    return progress
