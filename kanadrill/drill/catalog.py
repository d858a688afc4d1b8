"""
VocabularyCatalog - Static, read-only kana vocabulary grouped by category.

Provides:
- Per-category entry sequences in category order
- Flattened view of all entries
- Symbol lookup
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from pydantic import ValidationError

from kanadrill.schemas import Category, VocabularyEntry
from kanadrill.utils.data_loader import load_vocabulary_table

from .errors import CatalogError, NotFound


logger = logging.getLogger(__name__)


class VocabularyCatalog:
    """
    Immutable table of vocabulary entries grouped by category.

    Every symbol is unique across the whole catalog.
    """

    def __init__(self, entries: Mapping[Category, list[VocabularyEntry]]):
        grouped: dict[Category, tuple[VocabularyEntry, ...]] = {}
        by_symbol: dict[str, VocabularyEntry] = {}

        for category in Category:
            group = tuple(entries.get(category, ()))
            for entry in group:
                if entry.category != category:
                    raise CatalogError(
                        f"Entry {entry.symbol!r} is tagged {entry.category.value} "
                        f"but listed under {category.value}"
                    )
                if entry.symbol in by_symbol:
                    raise CatalogError(f"Duplicate symbol in catalog: {entry.symbol!r}")
                by_symbol[entry.symbol] = entry
            grouped[category] = group

        self._grouped = grouped
        self._by_symbol = by_symbol
        self._all = tuple(e for category in Category for e in grouped[category])

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "VocabularyCatalog":
        """
        Build a catalog from ``{category: {symbol: transliteration}}``.

        Raises:
            CatalogError: On unknown categories, malformed rows or duplicate symbols
        """
        entries: dict[Category, list[VocabularyEntry]] = {}
        for key, rows in data.items():
            try:
                category = Category(key)
            except ValueError:
                raise CatalogError(f"Unknown category: {key!r}") from None
            if not isinstance(rows, Mapping):
                raise CatalogError(f"Category {key!r} must map symbols to transliterations")

            group = entries.setdefault(category, [])
            for symbol, transliteration in rows.items():
                if not isinstance(transliteration, str):
                    raise CatalogError(
                        f"Transliteration for {symbol!r} must be a string, got {transliteration!r}"
                    )
                try:
                    group.append(VocabularyEntry(
                        symbol=str(symbol),
                        transliteration=transliteration,
                        category=category,
                    ))
                except ValidationError as e:
                    raise CatalogError(f"Invalid entry {symbol!r}: {e}") from e
        return cls(entries)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def categories(self) -> tuple[Category, ...]:
        """Categories in catalog order."""
        return tuple(Category)

    def entries_for(self, category: Category) -> tuple[VocabularyEntry, ...]:
        """Entries of one category, in table order."""
        return self._grouped[Category(category)]

    def all(self) -> tuple[VocabularyEntry, ...]:
        """All entries, category by category."""
        return self._all

    def lookup(self, symbol: str) -> VocabularyEntry:
        """Get the entry for a symbol, or raise NotFound."""
        try:
            return self._by_symbol[symbol]
        except KeyError:
            raise NotFound(symbol) from None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def __len__(self) -> int:
        return len(self._all)

    def __iter__(self) -> Iterator[VocabularyEntry]:
        return iter(self._all)


def load_catalog(path: Optional[Path] = None) -> VocabularyCatalog:
    """Load a catalog from a YAML table (default: bundled hiragana table)."""
    try:
        data = load_vocabulary_table(path)
    except ValueError as e:
        raise CatalogError(str(e)) from e
    catalog = VocabularyCatalog.from_mapping(data)
    logger.debug("Loaded catalog with %d entries from %s", len(catalog), path or "bundled table")
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> VocabularyCatalog:
    """Process-wide catalog built from the bundled table."""
    return load_catalog()
