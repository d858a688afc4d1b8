"""
KanaDrill Drill - Runtime components for quiz sessions.

This module provides:
- VocabularyCatalog: Static kana table grouped by category
- SetSelector: Resolve selection requests into shuffled practice sets
- WrongAnswerTracker / CustomSetBuilder: Mistake pool and custom staging
- QuizEngine: Session state machine with dwell auto-advance
"""

from .errors import (
    DrillError,
    EmptySelection,
    InvalidState,
    NotFound,
    CatalogError,
)

from .catalog import (
    VocabularyCatalog,
    load_catalog,
    default_catalog,
)

from .selection import (
    QuizSet,
    SetSelector,
    normalize,
    shuffle,
)

from .tracker import (
    WrongAnswerTracker,
    CustomSetBuilder,
)

from .scheduler import (
    Scheduler,
    ThreadingScheduler,
    ManualScheduler,
    NullScheduler,
)

from .engine import (
    QuizEngine,
    ResultLedger,
    EngineState,
    Idle,
    Presenting,
    Feedback,
    Completed,
)

__all__ = [
    # Errors
    "DrillError",
    "EmptySelection",
    "InvalidState",
    "NotFound",
    "CatalogError",
    # Catalog
    "VocabularyCatalog",
    "load_catalog",
    "default_catalog",
    # Selection
    "QuizSet",
    "SetSelector",
    "normalize",
    "shuffle",
    # Tracking
    "WrongAnswerTracker",
    "CustomSetBuilder",
    # Scheduling
    "Scheduler",
    "ThreadingScheduler",
    "ManualScheduler",
    "NullScheduler",
    # Engine
    "QuizEngine",
    "ResultLedger",
    "EngineState",
    "Idle",
    "Presenting",
    "Feedback",
    "Completed",
]
