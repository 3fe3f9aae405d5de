"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from client_register.domain.shared.exceptions import (
    ConflictError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class InvalidPhoneError(ValidationError):
    """Raised when a phone number is incomplete."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_PHONE)


class InvalidPasswordFormatError(ValidationError):
    """Password does not satisfy the configured format."""

    def __init__(self) -> None:
        super().__init__(
            "Password does not meet the required format",
            code=ErrorCode.INVALID_PASSWORD_FORMAT,
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email already registered",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )

