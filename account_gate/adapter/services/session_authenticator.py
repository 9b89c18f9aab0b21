"""
Session authenticator backed by Starlette's signed-cookie session.

The session only ever holds the user id under SESSION_USER_KEY; credential
hashes are bcrypt.
"""

import logging
from typing import Optional
from uuid import UUID

import bcrypt
from starlette.requests import HTTPConnection

from account_gate.app.services.session_authenticator import (
    MAX_PASSWORD_BYTES,
    ISessionAuthenticator,
)
from account_gate.domain.entities import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


class StarletteSessionAuthenticator(ISessionAuthenticator):
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def is_authenticated(self, request: HTTPConnection) -> bool:
        return self.current_user_id(request) is not None

    def current_user_id(self, request: HTTPConnection) -> Optional[UUID]:
        raw = request.session.get(SESSION_USER_KEY)
        if not raw:
            return None
        try:
            return UUID(raw)
        except ValueError:
            logger.warning("Discarding malformed user id in session")
            request.session.pop(SESSION_USER_KEY, None)
            return None

    def login(self, request: HTTPConnection, user: User) -> None:
        request.session[SESSION_USER_KEY] = str(user.id)

    def logout(self, request: HTTPConnection) -> None:
        request.session.pop(SESSION_USER_KEY, None)

    async def set_credential(self, user: User, password: str) -> None:
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
        password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt(self.rounds))
        user.password_hash = password_hash.decode()

    async def verify_credential(self, user: Optional[User], password: str) -> bool:
        if user is None or len(password.encode()) > MAX_PASSWORD_BYTES:
            # Hash dummy password to maintain constant time; an over-long
            # password can never have been stored
            bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(self.rounds))
            return False
        return bcrypt.checkpw(password.encode(), user.password_hash.encode())
