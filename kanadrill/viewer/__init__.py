"""
KanaDrill Viewer - Rendering components for the drill screens.

This module provides:
- Question, feedback and session summary display
- Read-mode vocabulary table with search
"""

from .quiz import (
    get_quiz_css,
    render_question,
    render_feedback,
    render_results,
    calculate_quiz_score,
    render_quiz_score,
)

from .reference import (
    get_reference_css,
    render_kana_cell,
    render_vocabulary_table,
    filter_entries,
)

__all__ = [
    # Quiz
    "get_quiz_css",
    "render_question",
    "render_feedback",
    "render_results",
    "calculate_quiz_score",
    "render_quiz_score",
    # Reference
    "get_reference_css",
    "render_kana_cell",
    "render_vocabulary_table",
    "filter_entries",
]
