"""Fixtures for API tests against the SQLite test database."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inkwell.infrastructure.database import Base, engine
from inkwell.main import app


@pytest_asyncio.fixture
async def client():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

