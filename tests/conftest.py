"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/              # Fast, isolated tests (no database)
    │   ├── register_auth/ # Credential core
    │   ├── register_config/
    │   ├── domain/
    │   ├── application/
    │   └── presentation/
    └── integration/       # In-memory SQLite persistence and HTTP tests

Settings are forced to test values before any application module is
imported, so the API module can be imported without a real .env file.
"""

import os

import pytest

os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-for-testing-only-0123456789"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # Low rounds for fast tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_REGEX"] = r"^(?=.*[A-Z])(?=.*\d).{8,}$"

from register_config import clear_settings_cache  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Ensure settings are loaded fresh from the test environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
