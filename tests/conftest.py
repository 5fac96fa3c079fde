"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. API tests talk to the real
FastAPI app through httpx with the session dependency pointed at that database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["SEED_DEFAULT_CATEGORIES"] = "false"

from datetime import datetime
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from expense_tracker.core.auth import User
from expense_tracker.core.database import Base, get_async_session
from expense_tracker.crud.category import create_category, seed_system_categories
from expense_tracker.main import app
from expense_tracker.models.category import Category
from expense_tracker.models.transaction import Transaction, TransactionType
from expense_tracker.schemas.transaction import TransactionCreate
from expense_tracker.services.transactions import TransactionService


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ────────────────────────────────────────────────────────────────────────────────
# Domain helpers
# ────────────────────────────────────────────────────────────────────────────────
async def make_user(db, email: str, name: str = "Test User") -> User:
    user = User(email=email, name=name, hashed_password="not-a-real-hash")
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_category(db, user: Optional[User], name: str, type: str = "expense", icon: str = "🏷️") -> Category:
    return await create_category(
        {"name": name, "type": type, "icon": icon},
        db,
        user_id=user.id if user else None,
    )


async def make_transaction(
    db,
    user: User,
    category: Category,
    amount: float,
    type: str,
    date: datetime,
    description: str = "Entry",
) -> Transaction:
    return await TransactionService(db).create(
        user.id,
        TransactionCreate(
            amount=amount,
            description=description,
            date=date,
            type=TransactionType(type),
            category_id=category.id,
        ),
    )


@pytest.fixture
async def alice(db):
    return await make_user(db, "alice@example.com", "Alice")


@pytest.fixture
async def bob(db):
    return await make_user(db, "bob@example.com", "Bob")


@pytest.fixture
async def system_categories(db):
    return await seed_system_categories(db)


# ────────────────────────────────────────────────────────────────────────────────
# API helpers
# ────────────────────────────────────────────────────────────────────────────────
async def register_and_login(client, email: str, password: str = "secret123", name: str = "Api User") -> dict:
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text

    response = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
async def alice_headers(client):
    return await register_and_login(client, "alice@example.com", name="Alice")


@pytest.fixture
async def bob_headers(client):
    return await register_and_login(client, "bob@example.com", name="Bob")
