"""
adaptlearn Schemas - Pydantic models for the adaptive lesson app.

This module exports all schema classes for:
- Level: learning styles, questions, levels and style content
- Progress: per-level progress records and availability
"""

# Level schemas
from .level import (
    LearningStyle,
    Question,
    StyleContent,
    Level,
)

# Progress schemas
from .progress import (
    LevelAvailability,
    LevelProgress,
)

__all__ = [
    # Level
    'LearningStyle',
    'Question',
    'StyleContent',
    'Level',
    # Progress
    'LevelAvailability',
    'LevelProgress',
]
