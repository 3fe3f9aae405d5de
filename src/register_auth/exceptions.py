"""Credential and token exceptions.

These exceptions are raised by the register_auth package and should be
caught and handled by the application layer (RegistrationService) or
translated at the HTTP boundary. None of them ever carries a plaintext
password.
"""


class AuthError(Exception):
    """Base exception for all credential and token errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidPolicyError(AuthError):
    """Raised when the configured password format rule cannot be compiled.

    This is a startup-fatal condition: the service must not run with a
    policy it cannot evaluate.
    """

    def __init__(self, message: str = "Password policy is not a valid pattern"):
        super().__init__(message)


class PolicyViolationError(AuthError):
    """Raised when a password does not satisfy the configured policy."""

    def __init__(self, message: str = "Password does not meet the required format"):
        super().__init__(message)


class SigningKeyError(AuthError):
    """Raised when token signing key material is missing or unusable."""

    def __init__(self, message: str = "Token signing key is not configured"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a token cannot be accepted."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token's signature is valid but its lifetime elapsed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class TokenSignatureError(InvalidTokenError):
    """Raised when a token is tampered, malformed, or signed with another key."""

    def __init__(self, message: str = "Token signature is invalid"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
