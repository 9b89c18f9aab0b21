"""
Validate Reset Token Use Case

Read-only check run before the reset form is shown.
"""

from datetime import datetime
from typing import Callable

from account_gate.domain.base import utcnow
from account_gate.domain.entities import User
from account_gate.libs.result import Error, Result, Return
from account_gate.app.services.unit_of_work import UnitOfWork
from .reset_tokens import INVALID_TOKEN_CODE, INVALID_TOKEN_MESSAGE, hash_reset_token


class ValidateResetTokenUseCase:
    """
    Resolves a plaintext reset token to its user.

    Unknown and expired tokens produce the same INVALID_TOKEN error.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, token: str) -> Result[User]:
        async with self.uow:
            user = await self.uow.users.get_by_valid_reset_token(
                hash_reset_token(token), self.clock()
            )

        if user is None:
            return Return.err(Error(INVALID_TOKEN_CODE, INVALID_TOKEN_MESSAGE))

        return Return.ok(user)
