import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from account_gate.adapter.services.session_authenticator import StarletteSessionAuthenticator
from account_gate.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_gate.app.services.notifier import INotifier
from account_gate.depends import get_authenticator, get_notifier, get_unit_of_work


class RecordingNotifier(INotifier):
    """Keeps sent messages in memory instead of mailing them."""

    def __init__(self):
        self.sent = []
        self.error = None

    async def send(self, *, user, subject, reset_url, template):
        if self.error is not None:
            raise self.error
        self.sent.append(
            {"email": user.email, "subject": subject, "reset_url": reset_url, "template": template}
        )


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
def app(db_session, notifier):
    from account_gate.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_authenticator] = lambda: StarletteSessionAuthenticator(rounds=4)
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
