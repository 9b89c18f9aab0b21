from abc import ABC, abstractmethod

from account_gate.domain.entities import User


class INotifier(ABC):
    """Out-of-band delivery of account emails - application layer"""

    @abstractmethod
    async def send(self, *, user: User, subject: str, reset_url: str, template: str) -> None:
        """
        Deliver a templated message to user.

        Raises whatever the transport raises; callers do not retry.
        """
        pass
