"""User domain - manages registered users.

This domain handles:
- User aggregate (identity, phones, credential state)
- Email and Phone value objects
- Repository interface (implementation in infrastructure)

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is normalized and unique, indexed for lookups
- Only the password hash is held, never the plaintext
"""

from client_register.domain.user.aggregates import User
from client_register.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidPasswordFormatError,
    InvalidPhoneError,
)
from client_register.domain.user.repositories import UserRepository
from client_register.domain.user.value_objects import Email, Phone

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidPasswordFormatError",
    "InvalidPhoneError",
    "Phone",
    "User",
    "UserRepository",
]
