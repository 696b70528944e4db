# pedigree_flow/config.py
from __future__ import annotations
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def env_flag(key: str, default: str = "false") -> bool:
    """Read a boolean flag; only 'true' (any case) counts as true."""
    return str(os.getenv(key, default)).strip().lower() == "true"


def env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw!r}")


def env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be a number, got {raw!r}")


# LLM Settings
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TEMPERATURE = env_float("OPENAI_TEMPERATURE", 0.35)
OPENAI_MAX_TOKENS = env_int("OPENAI_MAX_TOKENS", 900)

# FAQ cache Settings
ENABLE_FAQ_DB = env_flag("ENABLE_FAQ_DB", "true")
FAQ_CACHE_TTL_SECONDS = env_float("FAQ_CACHE_TTL_SECONDS", 300.0)
FAQ_MAX_ENTRIES = env_int("FAQ_MAX_ENTRIES", 400)
FAQ_MIN_SCORE = env_float("FAQ_MIN_SCORE", 0.48)
FAQ_CAPTURE_MODE = os.getenv("FAQ_CAPTURE_MODE", "draft").strip().lower()  # off | draft | approved
FAQ_CAPTURE_KEYWORDS_LIMIT = env_int("FAQ_CAPTURE_KEYWORDS_LIMIT", 12)

# Query pool logging
ENABLE_QUERY_POOL = env_flag("ENABLE_QUERY_POOL", "false")

# Pet name matcher Settings
PET_NAME_CACHE_TTL_SECONDS = env_float("PET_NAME_CACHE_TTL_SECONDS", 600.0)
PET_NAME_CACHE_LIMIT = env_int("PET_NAME_CACHE_LIMIT", 2000)

# Conversation Settings
PENDING_ACTION_TTL_SECONDS = env_float("PENDING_ACTION_TTL_SECONDS", 60.0)
TOPIC_SHORTCUT_MAX_WORDS = env_int("TOPIC_SHORTCUT_MAX_WORDS", 3)

# Application Settings
SITE_BASE_URL = os.getenv("SITE_BASE_URL", "https://petdegree.app").rstrip("/")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Breeding Settings
GESTATION_DAYS = 63
LISTING_MAX_AGE_DAYS = 365
