from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from account_gate.adapter.services.session_authenticator import StarletteSessionAuthenticator
from account_gate.adapter.services.smtp_notifier import SmtpNotifier
from account_gate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_gate.api.error import LoginRequired
from account_gate.app.services.notifier import INotifier
from account_gate.app.services.session_authenticator import ISessionAuthenticator
from account_gate.app.services.unit_of_work import UnitOfWork
from account_gate.domain.entities import User

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_authenticator() -> ISessionAuthenticator:
    return StarletteSessionAuthenticator(rounds=ApplicationConfig.BCRYPT_ROUNDS)


def get_notifier() -> INotifier:
    return SmtpNotifier(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        sender=ApplicationConfig.MAIL_FROM,
        starttls=ApplicationConfig.SMTP_STARTTLS,
    )


def require_authenticated(
    request: Request,
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
) -> UUID:
    """
    Dependency guarding pages that need a logged-in user.

    Returns:
        ID of the logged-in user

    Raises:
        LoginRequired: handled at app level as a flash + redirect to /login
    """
    user_id = authenticator.current_user_id(request)
    if user_id is None:
        raise LoginRequired()
    return user_id


async def get_current_user(
    request: Request,
    user_id: UUID = Depends(require_authenticated),
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> User:
    async with uow:
        user = await uow.users.get_by_id(user_id)

    if user is None:
        # Session outlived its account
        authenticator.logout(request)
        raise LoginRequired()
    return user


def get_optional_user_id(
    request: Request,
    authenticator: ISessionAuthenticator = Depends(get_authenticator),
) -> Optional[UUID]:
    return authenticator.current_user_id(request)
