"""
User Entity

Represents an account that can log in with email and password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from account_gate.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - an account identified by email.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash, written only by the session authenticator
    - reset_password_token holds the SHA-256 digest of the emailed token
    - reset_password_token and reset_password_expires are set and cleared together
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Password reset
    reset_password_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    reset_password_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    def set_reset_token(self, token_hash: str, expires_at: datetime) -> None:
        self.reset_password_token = token_hash
        self.reset_password_expires = expires_at

    def clear_reset_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expires = None
