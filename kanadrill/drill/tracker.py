"""
Cross-session mistake tracking and custom-set staging.

Provides:
- WrongAnswerTracker: process-wide record of missed symbols
- CustomSetBuilder: mutable staging area for a user-chosen symbol set
"""

import logging
from typing import Iterable, Mapping

from kanadrill.schemas import VocabularyEntry


logger = logging.getLogger(__name__)


class WrongAnswerTracker:
    """
    Accumulates missed symbols across sessions.

    Keyed by symbol, so a repeated miss overwrites rather than duplicates.
    Lives for the whole process and is cleared only by an explicit call to
    clear(); starting, finishing or aborting a session never clears it.
    """

    def __init__(self):
        self._wrong: dict[str, str] = {}

    def record(self, symbol: str, transliteration: str):
        """Upsert a missed symbol."""
        self._wrong[symbol] = transliteration

    def discard(self, symbol: str) -> bool:
        """Remove a symbol if present. Returns True if it was tracked."""
        return self._wrong.pop(symbol, None) is not None

    def clear(self):
        """Forget every tracked mistake."""
        if self._wrong:
            logger.info("Clearing %d tracked mistakes", len(self._wrong))
        self._wrong.clear()

    def snapshot(self) -> Mapping[str, str]:
        """Copy of the current symbol -> transliteration mapping, in miss order."""
        return dict(self._wrong)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._wrong

    def __len__(self) -> int:
        return len(self._wrong)

    def __bool__(self) -> bool:
        return bool(self._wrong)


class CustomSetBuilder:
    """Staging set of symbols picked by the user before a custom session."""

    def __init__(self):
        self._selected: set[str] = set()

    def toggle(self, symbol: str):
        """Add the symbol if absent, remove it if present."""
        if symbol in self._selected:
            self._selected.remove(symbol)
        else:
            self._selected.add(symbol)

    def select_category(self, entries: Iterable[VocabularyEntry]):
        """Stage every symbol in a row of entries."""
        self._selected.update(e.symbol for e in entries)

    def deselect_category(self, entries: Iterable[VocabularyEntry]):
        """Unstage every symbol in a row of entries."""
        self._selected.difference_update(e.symbol for e in entries)

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._selected)

    def clear(self):
        self._selected.clear()

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._selected

    def __len__(self) -> int:
        return len(self._selected)
