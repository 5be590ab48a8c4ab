"""
Progress tracking schemas for adaptlearn.

Defines Pydantic models for learner progress including:
- Per-level outcome of the latest completed session
- Level availability for display
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LevelAvailability(str, Enum):
    """Level availability status for UI display."""
    LOCKED = "locked"           # Previous level not completed
    AVAILABLE = "available"     # Can start
    COMPLETED = "completed"     # Latest session met the required score


class LevelProgress(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    level_id: int = Field(..., ge=1, alias="levelId")
    completed: bool = False
    score: int = Field(0, ge=0)
    attempts: int = Field(0, ge=0)
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")
