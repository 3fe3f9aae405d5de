"""Data classes shared by the credential services."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from register_auth.exceptions import InvalidPolicyError


@dataclass(frozen=True)
class PasswordPolicy:
    """Compiled format rule a candidate password must fully match.

    Build it once at startup with ``from_regex`` and share it read-only.
    """

    pattern: re.Pattern[str]

    @classmethod
    def from_regex(cls, regex: str) -> "PasswordPolicy":
        """Compile a policy from its textual regular expression.

        Raises
        ------
        InvalidPolicyError
            If the expression does not compile
        """
        try:
            return cls(pattern=re.compile(regex))
        except (re.error, TypeError) as e:
            msg = f"Invalid password policy pattern: {e}"
            raise InvalidPolicyError(msg) from e

    @property
    def regex(self) -> str:
        return self.pattern.pattern


@dataclass(frozen=True)
class StoredSecret:
    """Non-reversible, verifiable representation of a password."""

    hashed_value: str

    def __str__(self) -> str:
        return self.hashed_value


@dataclass(frozen=True)
class Token:
    """A signed, time-stamped assertion of identity."""

    subject: str
    issued_at: datetime
    expires_at: datetime
    payload: str

    def __str__(self) -> str:
        return self.payload


@dataclass(frozen=True)
class TokenPayload:
    """Decoded claims of a verified token."""

    subject: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self) -> bool:
        return datetime.now(tz=timezone.utc) >= self.expires_at


class TokenFailure(str, Enum):
    """Why a token was rejected.

    Callers react differently: an expired token asks for
    re-authentication, a bad signature is rejected outright.
    """

    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenVerification:
    """Result of verifying a token payload."""

    subject: str | None = None
    issued_at: datetime | None = None
    failure: TokenFailure | None = None

    @property
    def is_valid(self) -> bool:
        return self.failure is None

    @classmethod
    def valid(cls, subject: str, issued_at: datetime) -> "TokenVerification":
        return cls(subject=subject, issued_at=issued_at)

    @classmethod
    def invalid(cls, failure: TokenFailure) -> "TokenVerification":
        return cls(failure=failure)


class CredentialFailure(str, Enum):
    """Typed failures of credential issuance."""

    DUPLICATE_IDENTITY = "duplicate_identity"
    POLICY_VIOLATION = "policy_violation"


@dataclass(frozen=True)
class IssuedCredentials:
    """Stored secret and token produced for one identity."""

    identity: str
    secret: StoredSecret
    token: Token


@dataclass(frozen=True)
class CredentialOutcome:
    """Either issued credentials or the first failure encountered."""

    credentials: IssuedCredentials | None = None
    failure: CredentialFailure | None = None

    @property
    def is_success(self) -> bool:
        return self.failure is None and self.credentials is not None

    @classmethod
    def success(cls, credentials: IssuedCredentials) -> "CredentialOutcome":
        return cls(credentials=credentials)

    @classmethod
    def failed(cls, failure: CredentialFailure) -> "CredentialOutcome":
        return cls(failure=failure)
