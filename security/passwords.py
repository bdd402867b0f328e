"""
security/passwords.py
---------------------
bcrypt hashing for agent passwords. Only hashes are ever stored.
bcrypt reads at most 72 bytes, so longer passwords are refused outright.
"""

import bcrypt

from config import BCRYPT_ROUNDS

MAX_PASSWORD_BYTES = 72


def is_valid_password(password: str) -> bool:
    """True if the password is non-empty and fits bcrypt's 72-byte limit."""
    return 0 < len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash password using bcrypt.

    Raises:
        ValueError: If the password is empty or longer than 72 bytes.
    """
    if not is_valid_password(password):
        raise ValueError(f"Password must be 1 to {MAX_PASSWORD_BYTES} bytes long")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash. A malformed hash or an over-long password never matches."""
    if not hashed_password or not is_valid_password(plain_password):
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False
