"""
Level content schemas for adaptlearn.

Defines Pydantic models for the static lesson catalog:
- Learning styles
- Multiple-choice questions
- Levels with per-style content
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LearningStyle(str, Enum):
    VISUAL = "visual"
    AUDITORY = "auditory"
    READING = "reading"
    KINESTHETIC = "kinesthetic"


class Question(BaseModel):
    """Single-answer multiple-choice question."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    prompt: str
    options: list[str] = Field(..., min_length=2)
    answer_index: int = Field(..., ge=0, alias="answerIndex")
    explanation: str  # shown only after a correct answer

    @model_validator(mode="after")
    def answer_in_range(self):
        if self.answer_index >= len(self.options):
            raise ValueError(
                f"answerIndex {self.answer_index} out of range for {len(self.options)} options"
            )
        return self

    def is_correct(self, option_index: int) -> bool:
        return option_index == self.answer_index


class StyleContent(BaseModel):
    """One static blurb per learning style."""
    model_config = ConfigDict(frozen=True)

    visual: str = ""
    auditory: str = ""
    reading: str = ""
    kinesthetic: str = ""

    def for_style(self, style: LearningStyle) -> str:
        return getattr(self, LearningStyle(style).value)


class Level(BaseModel):
    """
    A fixed unit of lesson content.

    Level n requires level n-1 to be completed (level 1 is always open).
    Unlock state is derived from progress and never stored here.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., ge=1)
    title: str
    description: str = ""
    difficulty: int = Field(1, ge=1)  # display tag only
    required_score: int = Field(..., ge=0, alias="requiredScore")
    questions: list[Question] = Field(..., min_length=1)
    content: StyleContent = StyleContent()
    narration: str = ""
    reading_points: list[str] = Field(default=[], alias="readingPoints")

    @property
    def question_count(self) -> int:
        return len(self.questions)
