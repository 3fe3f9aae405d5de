"""FastAPI dependencies.

Engine, session maker and the credential services are process-wide
singletons built lazily from settings; a database session and a
RegistrationService are created per request.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from client_register.application.services import RegistrationService
from client_register.domain.user import User
from client_register.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from register_config.settings import get_settings
from register_auth import (
    CredentialService,
    JWTService,
    PasswordHashingService,
    PasswordPolicy,
    PasswordValidator,
)

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# --- Database ---------------------------------------------------------------


@lru_cache()
def get_database_url() -> str:
    """Return the configured URL, creating the directory of a SQLite file."""
    url = get_settings().database_url
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    return url


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    return create_async_engine(get_database_url(), echo=False, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request; routers commit or roll back."""
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# --- Credential services ----------------------------------------------------


@lru_cache(maxsize=1)
def get_jwt_service() -> JWTService:
    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        token_expire_hours=settings.jwt_token_expire_hours,
    )


@lru_cache(maxsize=1)
def get_password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=get_settings().password_hash_rounds)


@lru_cache(maxsize=1)
def get_password_validator() -> PasswordValidator:
    policy = PasswordPolicy.from_regex(get_settings().password_regex)
    return PasswordValidator(policy)


@lru_cache(maxsize=1)
def get_credential_service() -> CredentialService:
    """Build the credential service shared by every request."""
    return CredentialService(
        validator=get_password_validator(),
        password_service=get_password_service(),
        jwt_service=get_jwt_service(),
    )


def clear_service_cache() -> None:
    """Forget the credential singletons so they are rebuilt from settings."""
    for factory in (
        get_credential_service,
        get_password_validator,
        get_password_service,
        get_jwt_service,
    ):
        factory.cache_clear()


# --- Registration -----------------------------------------------------------


async def get_registration_service(
    session: DBSession,
    credential_service: CredentialService = Depends(get_credential_service),
) -> RegistrationService:
    return RegistrationService(
        user_repository=UserRepositorySQLAlchemy(session),
        credential_service=credential_service,
    )


RegService = Annotated[RegistrationService, Depends(get_registration_service)]


async def get_current_user(
    service: RegService,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token to its user.

    A missing header is answered here; expired and invalid tokens raise
    from ``resolve_token`` and reach the auth exception handler.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await service.resolve_token(credentials.credentials)


CurrentUser = Annotated[User, Depends(get_current_user)]
