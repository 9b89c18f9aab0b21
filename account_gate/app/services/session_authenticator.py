from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from starlette.requests import HTTPConnection

from account_gate.domain.entities import User

MAX_PASSWORD_BYTES = 72  # bcrypt input limit


class ISessionAuthenticator(ABC):
    """
    Session authenticator interface - application layer

    Owns the login session and the user's credential hash. Use cases and
    routes never touch password_hash or the session directly.
    """

    @abstractmethod
    def is_authenticated(self, request: HTTPConnection) -> bool:
        """Whether the request carries a logged-in session"""
        pass

    @abstractmethod
    def current_user_id(self, request: HTTPConnection) -> Optional[UUID]:
        """ID of the logged-in user, or None"""
        pass

    @abstractmethod
    def login(self, request: HTTPConnection, user: User) -> None:
        """Establish an authenticated session for user"""
        pass

    @abstractmethod
    def logout(self, request: HTTPConnection) -> None:
        """End the authenticated session, if any"""
        pass

    @abstractmethod
    async def set_credential(self, user: User, password: str) -> None:
        """Hash password and store it on user (caller persists).

        Raises ValueError for passwords over MAX_PASSWORD_BYTES; callers
        validate first.
        """
        pass

    @abstractmethod
    async def verify_credential(self, user: Optional[User], password: str) -> bool:
        """Check password against user's hash; False when user is None"""
        pass
