"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from stockroom.core.config import Settings
from stockroom.domain.entities.product import SAMPLE_PRODUCTS
from stockroom.infrastructure.api.app import create_app
from stockroom.infrastructure.persistence.repositories import InMemoryProductRepository

TEST_API_KEY = "test-api-key"


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: fixed API key, no sample data."""
    return Settings(
        environment="testing",
        api_key=TEST_API_KEY,
        seed_sample_products=False,
        log_format="console",
    )


@pytest.fixture
def repository() -> InMemoryProductRepository:
    """Repository seeded with the sample catalogue."""
    return InMemoryProductRepository(SAMPLE_PRODUCTS)


@pytest.fixture
def app(settings: Settings, repository: InMemoryProductRepository) -> FastAPI:
    """Application wired to the test settings and repository."""
    return create_app(settings=settings, repository=repository)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client for the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying the valid API key."""
    return {"x-api-key": TEST_API_KEY}
