"""
Login Use Case

Checks email and password; the route establishes the session.
"""

import logging

from account_gate.domain.entities import User
from account_gate.libs.result import Error, Result, Return
from account_gate.app.services.session_authenticator import ISessionAuthenticator
from account_gate.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for password login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password give the same error
    """

    def __init__(self, uow: UnitOfWork, authenticator: ISessionAuthenticator):
        self.uow = uow
        self.authenticator = authenticator

    async def execute(self, email: str, password: str) -> Result[User]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

        # Always perform hash check even if user not found
        if not await self.authenticator.verify_credential(user, password):
            logger.info("Failed login attempt for %s", email)
            return Return.err(Error("INVALID_CREDENTIALS", "Failed to login."))

        return Return.ok(user)
