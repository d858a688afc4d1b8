"""
Session schemas for KanaDrill.

Defines Pydantic models exchanged with the quiz engine:
- Selection requests (tagged by ``kind``)
- Answer records (one per question asked)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Union

from .vocabulary import Category


# -----------------------------------------------------------------------------
# Selection requests
# -----------------------------------------------------------------------------

class SelectionRequestBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str


class AllCategories(SelectionRequestBase):
    kind: Literal["all"] = "all"


class OneCategory(SelectionRequestBase):
    kind: Literal["category"] = "category"
    category: Category


class CustomSymbols(SelectionRequestBase):
    kind: Literal["custom"] = "custom"
    symbols: frozenset[str] = frozenset()


class WrongOnly(SelectionRequestBase):
    """Draws from the wrong-answer tracker at resolution time."""
    kind: Literal["wrong_only"] = "wrong_only"


SelectionRequest = Union[
    AllCategories,
    OneCategory,
    CustomSymbols,
    WrongOnly,
]


# -----------------------------------------------------------------------------
# Answer records
# -----------------------------------------------------------------------------

class AnswerRecord(BaseModel):
    """Outcome of one question. Created once, never mutated."""
    model_config = ConfigDict(frozen=True)

    symbol: str
    user_input: str          # normalized input
    expected: str            # canonical transliteration
    correct: bool
    sequence_index: int = Field(..., ge=0)
