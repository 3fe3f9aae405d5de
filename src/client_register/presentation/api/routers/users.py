"""Users endpoints: registration, login and the current user."""

from fastapi import APIRouter, status

from client_register.presentation.api.dependencies import (
    CurrentUser,
    DBSession,
    RegService,
)
from client_register.presentation.api.schemas.users import (
    LoginRequest,
    RegisterUserRequest,
    UserResponse,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Password, email or phone fails validation"},
        409: {"description": "Email already registered"},
    },
)
async def register_user(
    request: RegisterUserRequest,
    service: RegService,
    session: DBSession,
) -> UserResponse:
    """Store the user with their phones and return it with a fresh token."""
    phones = [phone.to_domain() for phone in request.phones]

    try:
        user = await service.register_user(
            name=request.name,
            email=request.email,
            password=request.password,
            phones=phones,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return UserResponse.from_domain(user)


@router.post(
    "/login",
    summary="Log in with email and password",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    request: LoginRequest,
    service: RegService,
    session: DBSession,
) -> UserResponse:
    """Check the password, issue a new token and record the login."""
    try:
        user = await service.login(email=request.email, password=request.password)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return UserResponse.from_domain(user)


@router.get(
    "/me",
    summary="Get the user the bearer token belongs to",
    responses={401: {"description": "Missing, invalid or expired token"}},
)
async def get_me(user: CurrentUser) -> UserResponse:
    return UserResponse.from_domain(user)
