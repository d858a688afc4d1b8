"""
Practice-set selection.

Provides:
- normalize: canonical comparable form of a typed answer
- shuffle: uniform random permutation (Fisher-Yates)
- SetSelector: resolve a SelectionRequest into a shuffled QuizSet
"""

import logging
import random
from typing import Iterable, Optional, TypeVar

from kanadrill.schemas import (
    AllCategories,
    CustomSymbols,
    OneCategory,
    SelectionRequest,
    VocabularyEntry,
    WrongOnly,
)

from .catalog import VocabularyCatalog
from .errors import EmptySelection, NotFound
from .tracker import CustomSetBuilder, WrongAnswerTracker


logger = logging.getLogger(__name__)

T = TypeVar("T")

QuizSet = tuple[VocabularyEntry, ...]


def normalize(raw: str) -> str:
    """Strip surrounding whitespace and case-fold. Idempotent."""
    return raw.strip().casefold()


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a uniformly random permutation of items.

    The input is copied, never mutated. Pass a seeded random.Random for
    reproducible orderings.
    """
    rng = rng or random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


class SetSelector:
    """
    Turn a SelectionRequest into a concrete, shuffled practice set.

    Combines the VocabularyCatalog (content) with the WrongAnswerTracker
    (review pool) and an optional CustomSetBuilder (staged symbols).
    """

    def __init__(
        self,
        catalog: VocabularyCatalog,
        tracker: WrongAnswerTracker,
        builder: Optional[CustomSetBuilder] = None,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.tracker = tracker
        self.builder = builder
        self.rng = rng or random.Random()
        self._positions = {e.symbol: i for i, e in enumerate(catalog.all())}

    def candidates(self, request: SelectionRequest) -> list[VocabularyEntry]:
        """Unshuffled candidate entries for a request."""
        if isinstance(request, AllCategories):
            return list(self.catalog.all())
        if isinstance(request, OneCategory):
            return list(self.catalog.entries_for(request.category))
        if isinstance(request, CustomSymbols):
            # catalog order first, so a seeded rng gives a stable result
            chosen = self._lookup_known(request.symbols)
            return sorted(chosen, key=self._catalog_position)
        if isinstance(request, WrongOnly):
            return self._lookup_known(self.tracker.snapshot().keys())
        raise TypeError(f"Unsupported selection request: {request!r}")

    def resolve(self, request: SelectionRequest) -> QuizSet:
        """
        Resolve a request into a QuizSet.

        Raises:
            EmptySelection: If no entries match the request
        """
        entries = self.candidates(request)
        if not entries:
            raise EmptySelection(f"No entries to practice for {request.kind!r} selection")
        quiz_set = tuple(shuffle(entries, self.rng))
        logger.debug("Resolved %s selection to %d entries", request.kind, len(quiz_set))
        return quiz_set

    def request_from_builder(self) -> CustomSymbols:
        """Build a CustomSymbols request from the staged custom selection."""
        if self.builder is None:
            return CustomSymbols()
        return CustomSymbols(symbols=self.builder.snapshot())

    def _lookup_known(self, symbols: Iterable[str]) -> list[VocabularyEntry]:
        entries = []
        for symbol in symbols:
            try:
                entries.append(self.catalog.lookup(symbol))
            except NotFound:
                logger.debug("Dropping unknown symbol %r from selection", symbol)
        return entries

    def _catalog_position(self, entry: VocabularyEntry) -> int:
        return self._positions[entry.symbol]
