"""Password reset token helpers shared by the reset use cases."""

import hashlib
import secrets
from datetime import timedelta

RESET_TOKEN_BYTES = 20
RESET_TOKEN_TTL = timedelta(hours=1)

INVALID_TOKEN_CODE = "INVALID_TOKEN"
INVALID_TOKEN_MESSAGE = "Password reset is invalid or has expired."


def generate_reset_token() -> str:
    """40-character hex token; only ever sent to the user, never stored."""
    return secrets.token_hex(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
