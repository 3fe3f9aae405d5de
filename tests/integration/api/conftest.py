"""API test fixtures.

The application runs against the in-memory test database through
httpx's ASGI transport; no server is started.
"""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from client_register.presentation.api.app import create_app
from client_register.presentation.api.dependencies import (
    clear_service_cache,
    get_db_session,
)


@pytest.fixture
def app(session_maker):
    clear_service_cache()
    app = create_app()

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    yield app
    app.dependency_overrides.clear()
    clear_service_cache()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def registration_payload() -> dict:
    return {
        "name": "Juan Rodriguez",
        "email": "juan@rodriguez.org",
        "password": "Hunter22",
        "phones": [
            {"number": "1234567", "cityCode": "1", "countryCode": "57"},
        ],
    }
