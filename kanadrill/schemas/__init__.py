"""
KanaDrill Schemas - Pydantic models for the kana drill trainer.

This module exports all schema classes for:
- Vocabulary: categories and symbol/transliteration entries
- Session: selection requests and answer records
"""

# Vocabulary schemas
from .vocabulary import (
    Category,
    CATEGORY_LABELS,
    VocabularyEntry,
)

# Session schemas
from .session import (
    AllCategories,
    OneCategory,
    CustomSymbols,
    WrongOnly,
    SelectionRequest,
    AnswerRecord,
)

__all__ = [
    # Vocabulary
    'Category',
    'CATEGORY_LABELS',
    'VocabularyEntry',
    # Session
    'AllCategories',
    'OneCategory',
    'CustomSymbols',
    'WrongOnly',
    'SelectionRequest',
    'AnswerRecord',
]
