"""
Reference renderer - Read-mode vocabulary table with search.

Provides:
- Vocabulary table grouped by category
- Search/category/mistake filtering
"""

import html
from typing import Container, Optional

from kanadrill.schemas import Category, VocabularyEntry


def get_reference_css() -> str:
    """Get CSS styles for the vocabulary table."""
    return """
    <style>
    .category-header {
        font-size: 1.1em;
        font-weight: 600;
        color: #b71c1c;
        margin: 1.2em 0 0.5em 0;
        padding-bottom: 0.3em;
        border-bottom: 1px solid #eee;
    }
    .kana-grid {
        display: grid;
        grid-template-columns: repeat(auto-fill, minmax(70px, 1fr));
        gap: 0.5em;
    }
    .kana-cell {
        background: #fafafa;
        border: 1px solid #eee;
        border-radius: 8px;
        padding: 0.5em;
        text-align: center;
    }
    .kana-cell.missed {
        background: #ffebee;
        border-color: #ef9a9a;
    }
    .kana-symbol {
        font-size: 1.8em;
    }
    .kana-romaji {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def render_kana_cell(entry: VocabularyEntry, missed: bool = False) -> str:
    """Render one symbol with its reading."""
    css_class = "kana-cell missed" if missed else "kana-cell"
    return (
        f'<div class="{css_class}">'
        f'<div class="kana-symbol">{html.escape(entry.symbol)}</div>'
        f'<div class="kana-romaji">{html.escape(entry.transliteration)}</div>'
        '</div>'
    )


def render_vocabulary_table(
    entries: list[VocabularyEntry],
    missed: Optional[Container[str]] = None,
) -> str:
    """
    Render vocabulary entries grouped by category.

    Args:
        entries: Entries to show (already filtered)
        missed: Symbols to highlight as mistakes

    Returns:
        HTML string for the table
    """
    if not entries:
        return '<p style="color:#666;">No matching characters.</p>'

    missed = missed or ()
    parts = [get_reference_css()]

    for category in Category:
        group = [e for e in entries if e.category == category]
        if not group:
            continue
        parts.append(f'<div class="category-header">{html.escape(category.label)}</div>')
        parts.append('<div class="kana-grid">')
        for entry in group:
            parts.append(render_kana_cell(entry, missed=entry.symbol in missed))
        parts.append('</div>')

    return ''.join(parts)


def filter_entries(
    entries: list[VocabularyEntry],
    search_query: str = "",
    category: Optional[Category] = None,
    mistakes: Optional[Container[str]] = None,
) -> list[VocabularyEntry]:
    """
    Filter vocabulary entries.

    Searches in: symbol, transliteration. ``mistakes`` keeps only the
    listed symbols.
    """
    query = search_query.strip().lower()
    result = []
    for entry in entries:
        if category is not None and entry.category != category:
            continue
        if mistakes is not None and entry.symbol not in mistakes:
            continue
        if query and query not in entry.symbol and query not in entry.transliteration:
            continue
        result.append(entry)
    return result
