"""Learning-style survey options and the stored style preference."""

import logging
from dataclasses import dataclass
from typing import Optional

from adaptlearn.schemas import LearningStyle

from .storage import LEARNING_STYLE_KEY, KeyValueStore, StorageError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleOption:
    value: LearningStyle
    label: str
    helper: str


STYLE_OPTIONS = (
    StyleOption(LearningStyle.VISUAL, "Visual", "Diagrams, charts, and images"),
    StyleOption(LearningStyle.AUDITORY, "Auditory", "Listen to explanations"),
    StyleOption(LearningStyle.READING, "Reading/Writing", "Detailed text and notes"),
    StyleOption(LearningStyle.KINESTHETIC, "Kinesthetic", "Hands-on, interactive demos"),
)


def load_learning_style(storage: KeyValueStore) -> Optional[LearningStyle]:
    """Get the saved style, or None if absent or unrecognised."""
    try:
        raw = storage.get(LEARNING_STYLE_KEY)
    except StorageError as e:
        logger.warning(f"Could not read learning style: {e}")
        return None

    if raw is None:
        return None
    try:
        return LearningStyle(raw)
    except ValueError:
        logger.warning(f"Ignoring unknown learning style {raw!r}")
        return None


def save_learning_style(storage: KeyValueStore, style: LearningStyle) -> bool:
    """Persist the chosen style. Returns False if storage failed."""
    try:
        storage.set(LEARNING_STYLE_KEY, LearningStyle(style).value)
    except StorageError as e:
        logger.warning(f"Could not save learning style: {e}")
        return False
    return True
