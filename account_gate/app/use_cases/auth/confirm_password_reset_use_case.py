"""
Confirm Password Reset Use Case

Consumes a reset token and sets the new password.
"""

import logging
from datetime import datetime
from typing import Callable

from account_gate.domain.base import utcnow
from account_gate.domain.entities import User
from account_gate.libs.result import Error, Result, Return
from account_gate.app.services.session_authenticator import (
    MAX_PASSWORD_BYTES,
    ISessionAuthenticator,
)
from account_gate.app.services.unit_of_work import UnitOfWork
from .reset_tokens import INVALID_TOKEN_CODE, INVALID_TOKEN_MESSAGE, hash_reset_token

logger = logging.getLogger(__name__)


def confirm_match(password: str, confirmation: str) -> bool:
    """Gate run by the route before the token is consumed."""
    return password == confirmation


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token must match exactly and expire strictly after now
    - New password must fit the credential hash (at most 72 bytes)
    - Credential is hashed by the session authenticator
    - Token fields are cleared in the same commit, so the token is single-use
    - Logging the user in is left to the caller, which owns the request
    """

    def __init__(
        self,
        uow: UnitOfWork,
        authenticator: ISessionAuthenticator,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.authenticator = authenticator
        self.clock = clock

    def _validate_password(self, password: str) -> Result[None]:
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.",
                )
            )
        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[User]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with the updated user, or INVALID_PASSWORD / INVALID_TOKEN error
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_valid_reset_token(
                hash_reset_token(token), self.clock()
            )

            if user is None:
                return Return.err(Error(INVALID_TOKEN_CODE, INVALID_TOKEN_MESSAGE))

            await self.authenticator.set_credential(user, new_password)
            user.clear_reset_token()
            user = await self.uow.users.update(user)
            await self.uow.commit()

        logger.info("Password reset completed for user %s", user.id)
        return Return.ok(user)
