#!/usr/bin/env python
"""CLI script to create a login account.

Usage:
    python -m account_gate.cli.create_user user@example.com ["Display Name"]

Creates the user with a randomly generated password and prints it.
Running it again with the same email does nothing.
"""

import asyncio
import secrets
import sys
from typing import Optional

from config import ApplicationConfig
from account_gate.adapter.services.session_authenticator import StarletteSessionAuthenticator
from account_gate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_gate.domain.entities import User


async def create_user(email: str, name: Optional[str] = None) -> tuple[bool, str]:
    """Create a user account.

    Returns:
        Tuple of (created: bool, message: str)
        - If created=True, message contains the temporary password
        - If created=False, message explains why
    """
    from account_gate.depends import AsyncSessionLocal, init_db

    await init_db()

    authenticator = StarletteSessionAuthenticator(rounds=ApplicationConfig.BCRYPT_ROUNDS)

    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            if await uow.users.get_by_email(email) is not None:
                return False, f"User {email} already exists"

            temp_password = secrets.token_urlsafe(12)
            user = User(email=email, name=name, password_hash="")
            await authenticator.set_credential(user, temp_password)
            await uow.users.create(user)
            await uow.commit()

    return True, temp_password


def main():
    """Main entry point for CLI."""
    if len(sys.argv) not in (2, 3):
        print("Usage: python -m account_gate.cli.create_user <email> [name]")
        sys.exit(1)

    email = sys.argv[1].strip().lower()
    name = sys.argv[2] if len(sys.argv) == 3 else None

    if "@" not in email or "." not in email:
        print(f"Error: Invalid email address: {email}")
        sys.exit(1)

    created, message = asyncio.run(create_user(email, name))

    if created:
        print(f"Email:    {email}")
        print(f"Password: {message}")
        print("Log in and use 'I forgot my password!' to choose your own.")
    else:
        print(message)


if __name__ == "__main__":
    main()
