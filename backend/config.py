"""
Runtime configuration loaded from the environment.

Values are read once at import time, after loading a `.env` file from the
project root if one exists.
"""

import os
from typing import List

from dotenv import load_dotenv

# Load .env only once here
load_dotenv()

# --- DATABASE ---
DATABASE_URL = os.getenv("DATABASE_URL")
DB_POOL_MIN = int(os.getenv("DB_POOL_MIN", 1))
DB_POOL_MAX = int(os.getenv("DB_POOL_MAX", 10))

# --- PASSWORD HASHING (Argon2id, RFC 9106 low-memory profile by default) ---
ARGON2_TIME_COST = int(os.getenv("ARGON2_TIME_COST", 3))
ARGON2_MEMORY_COST = int(os.getenv("ARGON2_MEMORY_COST", 65536))  # KiB
ARGON2_PARALLELISM = int(os.getenv("ARGON2_PARALLELISM", 4))

# --- SERVER ---
PORT = int(os.getenv("PORT", 5000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def cors_origins() -> List[str]:
    """
    Parse CORS_ORIGINS (comma separated) into a list.

    Returns:
        list: Allowed origins, ["*"] when the variable is unset.
    """
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]
