"""Environment-driven settings for the lucky draw."""

import os
from pathlib import Path

from dotenv import load_dotenv

from .db.utils import resolve_sqlite_url

# Pick up a local .env before anything reads the environment.
load_dotenv()

# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable '{name}' must be an integer") from exc
    if value <= 0:
        raise ValueError(f"Environment variable '{name}' must be positive")
    return value


DATABASE_URL = resolve_sqlite_url(os.getenv("DB_URL", "sqlite:///./dev.db"), ROOT_DIR)

# Size of one batch of candidates shown during a live draw.
DEFAULT_CANDIDATE_COUNT = _int_from_env("LUCKYDRAW_CANDIDATE_COUNT", 10)
