"""
adaptlearn Viewer - Rendering components for lesson display.

This module provides:
- Style-specific content blocks
- Question, feedback and score display
- Narration control
"""

from .content import (
    get_content_css,
    ContentRenderer,
    VisualRenderer,
    AuditoryRenderer,
    ReadingRenderer,
    KinestheticRenderer,
    FallbackRenderer,
    get_content_renderer,
    render_level_content,
    fraction_readout,
)

from .quiz import (
    get_quiz_css,
    render_question,
    render_feedback,
    calculate_level_score,
    render_level_score,
    describe_progress,
)

from .audio import (
    Narrator,
    NarrationUnavailable,
    TranscriptNarrator,
    NARRATION_UNSUPPORTED_MESSAGE,
    toggle_narration,
    narration_button_label,
)

__all__ = [
    # Content
    "get_content_css",
    "ContentRenderer",
    "VisualRenderer",
    "AuditoryRenderer",
    "ReadingRenderer",
    "KinestheticRenderer",
    "FallbackRenderer",
    "get_content_renderer",
    "render_level_content",
    "fraction_readout",
    # Quiz
    "get_quiz_css",
    "render_question",
    "render_feedback",
    "calculate_level_score",
    "render_level_score",
    "describe_progress",
    # Narration
    "Narrator",
    "NarrationUnavailable",
    "TranscriptNarrator",
    "NARRATION_UNSUPPORTED_MESSAGE",
    "toggle_narration",
    "narration_button_label",
]
