"""Register Auth - credential policy and token issuance.

This package holds the reusable credential core, independent of how
users are stored or served. It handles:
- Password format validation (configurable regex policy)
- Password hashing (bcrypt)
- JWT token issuance and verification

Architecture:
    register_auth/
    ├── services/           # Pure logic (policy, hashing, JWT, issuance)
    ├── schemas.py          # Data classes and typed outcomes
    └── exceptions.py       # Auth exceptions

Usage:
    from register_auth import (
        CredentialService,
        JWTService,
        PasswordHashingService,
        PasswordPolicy,
        PasswordValidator,
    )
"""

from register_auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidPolicyError,
    InvalidTokenError,
    PolicyViolationError,
    SigningKeyError,
    TokenExpiredError,
    TokenSignatureError,
)
from register_auth.schemas import (
    CredentialFailure,
    CredentialOutcome,
    IssuedCredentials,
    PasswordPolicy,
    StoredSecret,
    Token,
    TokenFailure,
    TokenPayload,
    TokenVerification,
)
from register_auth.services import (
    CredentialService,
    JWTService,
    PasswordHashingService,
    PasswordValidator,
)

__all__ = [
    # Services
    "CredentialService",
    "JWTService",
    "PasswordHashingService",
    "PasswordValidator",
    # Schemas
    "CredentialFailure",
    "CredentialOutcome",
    "IssuedCredentials",
    "PasswordPolicy",
    "StoredSecret",
    "Token",
    "TokenFailure",
    "TokenPayload",
    "TokenVerification",
    # Exceptions
    "AuthError",
    "InvalidCredentialsError",
    "InvalidPolicyError",
    "InvalidTokenError",
    "PolicyViolationError",
    "SigningKeyError",
    "TokenExpiredError",
    "TokenSignatureError",
]
