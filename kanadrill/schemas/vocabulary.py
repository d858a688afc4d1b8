"""
Vocabulary schemas for KanaDrill.

Defines Pydantic models for the kana vocabulary:
- Category enumeration (four disjoint groupings)
- Vocabulary entries (symbol -> transliteration)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum


class Category(str, Enum):
    BASE = "base"
    DIGRAPH = "digraph"
    VOICED = "voiced"
    SEMI_VOICED = "semi_voiced"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.BASE: "Base",
    Category.DIGRAPH: "Digraphs",
    Category.VOICED: "Voiced (dakuten)",
    Category.SEMI_VOICED: "Semi-voiced (handakuten)",
}


class VocabularyEntry(BaseModel):
    """One kana symbol and its canonical romanized reading."""
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1, max_length=2)
    transliteration: str = Field(..., min_length=1)  # canonical lowercase romaji
    category: Category

    @field_validator('symbol')
    @classmethod
    def symbol_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Symbol must not be blank')
        return v

    @field_validator('transliteration')
    @classmethod
    def transliteration_canonical(cls, v):
        if v != v.strip().casefold():
            raise ValueError(f'Transliteration must be canonical lowercase: {v!r}')
        return v
