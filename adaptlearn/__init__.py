"""
adaptlearn - Adaptive fraction lessons with style-aware content.

Packages:
- schemas: Pydantic models for levels, questions and progress
- classroom: Runtime catalog, progress store, lesson sessions, hints
- viewer: HTML rendering for lessons, quizzes and narration
"""

__version__ = "0.1.0"
