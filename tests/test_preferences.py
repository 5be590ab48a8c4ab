"""Tests for the learning-style preference."""

from adaptlearn.classroom import (
    LEARNING_STYLE_KEY,
    STYLE_OPTIONS,
    MemoryStore,
    load_learning_style,
    save_learning_style,
)
from adaptlearn.schemas import LearningStyle

from conftest import FailingStore


def test_survey_offers_every_style():
    assert {opt.value for opt in STYLE_OPTIONS} == set(LearningStyle)


def test_save_and_load():
    storage = MemoryStore()
    assert save_learning_style(storage, LearningStyle.KINESTHETIC)
    assert storage.get(LEARNING_STYLE_KEY) == "kinesthetic"
    assert load_learning_style(storage) == LearningStyle.KINESTHETIC


def test_missing_style():
    assert load_learning_style(MemoryStore()) is None


def test_unknown_style_ignored():
    assert load_learning_style(MemoryStore({LEARNING_STYLE_KEY: "osmosis"})) is None


def test_storage_failure():
    store = FailingStore()
    assert load_learning_style(store) is None
    assert not save_learning_style(store, LearningStyle.VISUAL)
