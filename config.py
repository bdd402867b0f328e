"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "macnss")
DB_USER: str = os.getenv("DB_USER", "macnss_admin")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Passwords ─────────────────────────────────────────────
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# ── Sign-in ───────────────────────────────────────────────
SIGNIN_MAX_ATTEMPTS: int = int(os.getenv("SIGNIN_MAX_ATTEMPTS", "5"))
SIGNIN_WINDOW_SECONDS: int = int(os.getenv("SIGNIN_WINDOW_SECONDS", "300"))
SIGNIN_MAX_PROMPTS: int = int(os.getenv("SIGNIN_MAX_PROMPTS", "3"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.getenv("LOG_FILE", "")
