"""Credential services.

Provides password validation, password hashing, JWT token management
and the credential issuance flow that chains them.
"""

from register_auth.services.credential_service import CredentialService
from register_auth.services.jwt_service import JWTService
from register_auth.services.password_policy import PasswordValidator, validate
from register_auth.services.password_service import PasswordHashingService

__all__ = [
    "CredentialService",
    "JWTService",
    "PasswordHashingService",
    "PasswordValidator",
    "validate",
]
