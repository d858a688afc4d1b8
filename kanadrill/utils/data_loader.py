"""
Data loader utility for KanaDrill.

Loads YAML vocabulary tables from the data/ directory.
"""

from pathlib import Path
from typing import Any
import yaml


# Bundled data directory (inside the package)
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CATALOG_FILE = DATA_DIR / "kana.yaml"


def load_vocabulary_table(path: Path | None = None) -> dict[str, dict[str, Any]]:
    """
    Load a vocabulary table from YAML.

    Args:
        path: Optional custom YAML file (default: bundled kana.yaml)

    Returns:
        Dict mapping category name to {symbol: transliteration}, in file order.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If the top level is not a mapping
    """
    file_path = path or DEFAULT_CATALOG_FILE

    if not file_path.exists():
        raise FileNotFoundError(f"Vocabulary table not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Vocabulary table must be a mapping of categories: {file_path}")
    return data
