"""
Request Password Reset Use Case

Issues a single-use reset token and emails the reset link.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from account_gate.domain.base import utcnow
from account_gate.libs.result import Result, Return
from account_gate.app.services.notifier import INotifier
from account_gate.app.services.unit_of_work import UnitOfWork
from .dtos import RequestPasswordResetResponse
from .reset_tokens import RESET_TOKEN_TTL, generate_reset_token, hash_reset_token

logger = logging.getLogger(__name__)

RESET_SENT_MESSAGE = "You have been emailed a password reset link."
RESET_EMAIL_SUBJECT = "Password Reset"
RESET_EMAIL_TEMPLATE = "password-reset"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Token is 20 random bytes, hex encoded; only its SHA-256 digest is stored
    - Token expires after ttl (1 hour by default)
    - No email enumeration (same response for known and unknown emails)
    - Store and notifier failures propagate; a token persisted before a
      failed send stays valid until it expires
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotifier,
        ttl: timedelta = RESET_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.notifier = notifier
        self.ttl = ttl
        self.clock = clock

    async def execute(
        self, email: str, reset_url_for: Callable[[str], str]
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Address submitted on the forgot-password form
            reset_url_for: Builds the absolute reset link for a plaintext token

        Returns:
            Result with the user-facing confirmation, identical whether or
            not the email belongs to an account
        """
        response = RequestPasswordResetResponse(status="sent", message=RESET_SENT_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(response)

            reset_token = generate_reset_token()
            user.set_reset_token(hash_reset_token(reset_token), self.clock() + self.ttl)
            user = await self.uow.users.update(user)
            await self.uow.commit()

        await self.notifier.send(
            user=user,
            subject=RESET_EMAIL_SUBJECT,
            reset_url=reset_url_for(reset_token),
            template=RESET_EMAIL_TEMPLATE,
        )
        logger.info("Password reset requested for user %s", user.id)

        return Return.ok(response)
