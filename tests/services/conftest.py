"""Service test fixtures — async SQLite DB, in-memory company table, API client.

Invariants:
    - Every test gets a fresh in-memory SQLite database and an empty company table
    - get_db / get_company_table dependencies overridden to use those stores
    - Auth stays real: route tests send a bearer token signed with the test secret

Design Decisions:
    - SQLite in-memory via aiosqlite: no PostgreSQL-specific features are used
    - StaticPool keeps one connection so every session sees the same in-memory DB
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from thryv.config import get_settings
from thryv.db.base import Base
from thryv.infrastructure.customer_repository import CustomerRepository
from thryv.infrastructure.database import get_db
from thryv.infrastructure.dynamodb import get_company_table
from thryv.main import app
from thryv.services.company_service import CompanyService
from thryv.services.customer_service import CustomerService
import thryv.models  # noqa: F401

from tests.fakes import InMemoryTable


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def company_table():
    return InMemoryTable()


@pytest.fixture
def customer_service(test_db):
    return CustomerService(CustomerRepository(test_db))


@pytest.fixture
def company_service(company_table):
    return CompanyService(company_table)


@pytest.fixture
def auth_headers():
    settings = get_settings()
    token = jwt.encode(
        {"sub": "user-123", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(test_session_factory, company_table):
    """FastAPI test client with both store dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_get_company_table():
        yield company_table

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_company_table] = override_get_company_table

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
