"""JWT token service.

Issues signed tokens asserting an identity and verifies them back.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from register_auth.exceptions import (
    SigningKeyError,
    TokenExpiredError,
    TokenSignatureError,
)
from register_auth.schemas import Token, TokenFailure, TokenPayload, TokenVerification

logger = logging.getLogger(__name__)


class JWTService:
    """Service for JWT token issuance and verification.

    Tokens carry the subject identity, the issue time and an expiry
    derived from the configured lifetime. They are signed with HS256
    using key material held by the process.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue("user@example.com")
    >>> service.verify(token.payload).subject
    'user@example.com'
    """

    DEFAULT_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        token_expire_hours: int = DEFAULT_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        token_expire_hours
            Hours until an issued token expires (default 24)

        Raises
        ------
        SigningKeyError
            If no key material is given
        """
        if not secret_key or not secret_key.strip():
            msg = "JWT secret key cannot be empty"
            raise SigningKeyError(msg)
        if token_expire_hours <= 0:
            msg = "Token lifetime must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(hours=token_expire_hours)

    @property
    def lifetime(self) -> timedelta:
        return self._expire

    def issue(self, subject: str, expires_delta: timedelta | None = None) -> Token:
        """Issue a signed token for ``subject``.

        Parameters
        ----------
        subject
            The identity the token asserts (e.g. an email)
        expires_delta
            Custom lifetime (optional)

        Returns
        -------
        The issued Token
        """
        if not subject:
            msg = "Token subject cannot be empty"
            raise ValueError(msg)

        # JWT time claims have second precision
        issued_at = datetime.now(tz=timezone.utc).replace(microsecond=0)
        expires_at = issued_at + (expires_delta if expires_delta is not None else self._expire)

        payload = jwt.encode(
            {"sub": subject, "iat": issued_at, "exp": expires_at},
            self._secret_key,
            algorithm=self.ALGORITHM,
        )
        return Token(
            subject=subject,
            issued_at=issued_at,
            expires_at=expires_at,
            payload=payload,
        )

    def decode(self, payload: str) -> TokenPayload:
        """Verify and decode a token payload.

        Parameters
        ----------
        payload
            The encoded token string

        Returns
        -------
        TokenPayload containing the decoded claims

        Raises
        ------
        TokenExpiredError
            If the signature is valid but the token has expired
        TokenSignatureError
            If the token is tampered, malformed, or signed with another key
        """
        try:
            claims = jwt.decode(
                payload,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "iat", "exp"]},
            )
            subject = claims["sub"]
            if not isinstance(subject, str) or not subject:
                msg = "subject claim is empty"
                raise ValueError(msg)

            return TokenPayload(
                subject=subject,
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except jwt.InvalidTokenError as e:
            raise TokenSignatureError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise TokenSignatureError(f"Malformed token payload: {e}") from e

    def verify(self, payload: str) -> TokenVerification:
        """Verify a token payload without raising.

        Returns
        -------
        TokenVerification with the subject and issue time, or the
        failure kind (expired vs. invalid signature)
        """
        try:
            decoded = self.decode(payload)
        except TokenExpiredError:
            logger.debug("Rejected expired token")
            return TokenVerification.invalid(TokenFailure.EXPIRED)
        except TokenSignatureError as e:
            logger.debug("Rejected token: %s", e.message)
            return TokenVerification.invalid(TokenFailure.INVALID_SIGNATURE)

        return TokenVerification.valid(decoded.subject, decoded.issued_at)
