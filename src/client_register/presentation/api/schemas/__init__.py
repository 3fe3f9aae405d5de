"""API request/response schemas."""

from client_register.presentation.api.schemas.users import (
    LoginRequest,
    PhoneSchema,
    RegisterUserRequest,
    UserResponse,
)

__all__ = [
    "LoginRequest",
    "PhoneSchema",
    "RegisterUserRequest",
    "UserResponse",
]
