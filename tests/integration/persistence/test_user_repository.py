"""Integration tests for the SQLAlchemy user repository."""

from datetime import timedelta
from uuid import uuid4

import pytest

from client_register.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    Phone,
    User,
)
from client_register.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)


def _user(email: str = "user@example.com", phones=()) -> User:
    return User.create(
        name="Juan Rodriguez",
        email=email,
        password_hash="$2b$04$" + "a" * 53,
        token="header.claims.signature",
        phones=phones,
    )


class TestUserRepositorySQLAlchemy:
    """Persistence round trips through a real SQLite database."""

    async def test_save_and_find_by_id(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        user = _user(phones=[Phone("1234567", "1", "57"), Phone("7654321", "2", "58")])

        await repo.save(user)
        await db_session.commit()

        found = await repo.find_by_id(user.id)

        assert found == user
        assert found.name == "Juan Rodriguez"
        assert found.email == "user@example.com"
        assert found.password_hash == user.password_hash
        assert found.token == user.token
        assert found.is_active is True
        assert found.phones == user.phones

    async def test_find_by_id_missing_returns_none(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)

        assert await repo.find_by_id(uuid4()) is None

    async def test_find_by_email_is_case_insensitive(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        user = _user()
        await repo.save(user)
        await db_session.commit()

        found = await repo.find_by_email("USER@Example.com")

        assert found is not None
        assert found.id == user.id

    async def test_find_by_email_accepts_value_object(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        user = _user()
        await repo.save(user)

        assert await repo.find_by_email(Email("user@example.com")) is not None

    async def test_find_by_email_missing_returns_none(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)

        assert await repo.find_by_email("nobody@example.com") is None

    async def test_find_by_email_invalid_raises(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)

        with pytest.raises(InvalidEmailError):
            await repo.find_by_email("not-an-email")

    async def test_exists_by_email(self, db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.save(_user())

        assert await repo.exists_by_email("user@example.com") is True
        assert await repo.exists_by_email(Email("other@example.com")) is False

    async def test_timestamps_are_timezone_aware(self, session_maker):
        user = _user()
        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).save(user)
            await session.commit()

        async with session_maker() as session:
            found = await UserRepositorySQLAlchemy(session).find_by_id(user.id)

        assert found.created_at.tzinfo is not None
        assert found.modified_at.tzinfo is not None
        assert found.last_login_at.tzinfo is not None
        assert abs(found.created_at - user.created_at) < timedelta(seconds=1)

    async def test_save_updates_existing_user(self, session_maker):
        user = _user()
        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).save(user)
            await session.commit()

        user.record_login("new.token.value")
        user.deactivate()
        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).save(user)
            await session.commit()

        async with session_maker() as session:
            found = await UserRepositorySQLAlchemy(session).find_by_id(user.id)

        assert found.token == "new.token.value"
        assert found.is_active is False

    async def test_duplicate_email_raises(self, session_maker):
        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).save(_user())
            await session.commit()

        async with session_maker() as session:
            repo = UserRepositorySQLAlchemy(session)
            with pytest.raises(EmailAlreadyExistsError):
                await repo.save(_user())
            await session.rollback()
