"""
Runtime settings for KanaDrill.

Settings come from KANADRILL_* environment variables; a project .env file
is loaded first when present.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


PROJECT_ROOT = Path(__file__).parent.parent.parent
ENV_PREFIX = "KANADRILL_"

DEFAULT_DWELL_SECONDS = 1.2


class Settings(BaseModel):
    dwell_seconds: float = Field(DEFAULT_DWELL_SECONDS, ge=0)  # feedback dwell before auto-advance
    seed: Optional[int] = None          # shuffle seed; None = nondeterministic
    evict_on_correct: bool = False      # drop a symbol from mistakes once answered correctly
    catalog_path: Optional[Path] = None # alternative YAML catalog
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def log_level_known(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f'Unknown log level: {v}')
        return v


def load_settings(env_file: Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env file (default: PROJECT_ROOT/.env)
        environ: Optional mapping to read instead of os.environ

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If a variable has an invalid value
    """
    if environ is None:
        load_dotenv(env_file or PROJECT_ROOT / ".env")
        environ = dict(os.environ)

    values = {}
    for field_name in Settings.model_fields:
        raw = environ.get(ENV_PREFIX + field_name.upper())
        if raw is not None and raw.strip() != "":
            values[field_name] = raw.strip()
    return Settings(**values)
