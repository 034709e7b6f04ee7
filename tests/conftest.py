import os

# Settings are read at import time
os.environ["ENV"] = "test"
os.environ["DEBUG"] = "false"
os.environ["ENABLE_FILE_LOGGING"] = "false"
os.environ["ENABLE_REQUEST_LOGGING"] = "false"
os.environ["ENABLE_DEMO_DATA"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from main import app
from core.database import Base, get_db


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging data directly in the database."""
    async with session_factory() as session:
        yield session


@pytest.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def register(client: AsyncClient, email: str, user_type: str = "patient", password: str = "secret", **extra) -> dict:
    """Register a user and return Authorization headers for it."""
    response = await client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "userType": user_type, **extra},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def patient_headers(client) -> dict:
    return await register(client, "patient@example.com", "patient", fullName="Pat Ient")


@pytest.fixture
async def caretaker_headers(client) -> dict:
    return await register(client, "caretaker@example.com", "caretaker", fullName="Care Taker")


@pytest.fixture
async def linked_patient(client, caretaker_headers) -> dict:
    """A patient linked to the caretaker. Returns the patient's id and headers."""
    code = (await client.get("/api/users/me/referral-code", headers=caretaker_headers)).json()["referralCode"]
    headers = await register(client, "linked@example.com", "patient", referralCode=code)
    me = (await client.get("/api/users/me", headers=headers)).json()
    return {"id": me["id"], "headers": headers}
