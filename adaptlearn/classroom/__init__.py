"""
adaptlearn Classroom - Runtime components for levels and learner progress.

This module provides:
- LevelCatalog: Load the static level catalog
- Storage: Key/value persistence collaborators
- ProgressStore: Per-level progress and unlock derivation
- LessonSession: Question-by-question state machine
- AdaptiveDifficulty: Standalone difficulty dial
- Preferences: Learning-style survey and stored choice
- Hints: AI hint client and side panel
"""

from .catalog import (
    LevelCatalog,
    CatalogError,
    DEFAULT_CATALOG_PATH,
    load_catalog,
    parse_catalog,
)

from .storage import (
    KeyValueStore,
    MemoryStore,
    SqliteStore,
    StorageError,
    DEFAULT_STORAGE_DIR,
    DEFAULT_STORAGE_DB,
    DIFFICULTY_KEY,
    LEARNING_STYLE_KEY,
    LEVEL_PROGRESS_KEY,
)

from .progress import (
    ProgressStore,
    derive_unlocks,
    dump_progress,
    parse_progress,
)

from .session import (
    LessonSession,
    SessionAction,
    SessionOutcome,
    SessionPhase,
)

from .difficulty import AdaptiveDifficulty

from .preferences import (
    STYLE_OPTIONS,
    StyleOption,
    load_learning_style,
    save_learning_style,
)

from .hints import (
    HintClient,
    HintPanel,
    NO_HINT_MESSAGE,
    FETCH_FAILED_MESSAGE,
)

__all__ = [
    # Catalog
    "LevelCatalog",
    "CatalogError",
    "DEFAULT_CATALOG_PATH",
    "load_catalog",
    "parse_catalog",
    # Storage
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "StorageError",
    "DEFAULT_STORAGE_DIR",
    "DEFAULT_STORAGE_DB",
    "DIFFICULTY_KEY",
    "LEARNING_STYLE_KEY",
    "LEVEL_PROGRESS_KEY",
    # Progress
    "ProgressStore",
    "derive_unlocks",
    "dump_progress",
    "parse_progress",
    # Session
    "LessonSession",
    "SessionAction",
    "SessionOutcome",
    "SessionPhase",
    # Difficulty
    "AdaptiveDifficulty",
    # Preferences
    "STYLE_OPTIONS",
    "StyleOption",
    "load_learning_style",
    "save_learning_style",
    # Hints
    "HintClient",
    "HintPanel",
    "NO_HINT_MESSAGE",
    "FETCH_FAILED_MESSAGE",
]
