"""KanaDrill utilities."""

from .data_loader import load_vocabulary_table, DEFAULT_CATALOG_FILE
from .config import Settings, load_settings

__all__ = [
    "load_vocabulary_table",
    "DEFAULT_CATALOG_FILE",
    "Settings",
    "load_settings",
]
