"""Password hashing service using bcrypt.

Provides salted one-way hashing of passwords and verification of
plaintext attempts against stored secrets.
"""

import re

import bcrypt

from register_auth.exceptions import PolicyViolationError
from register_auth.schemas import StoredSecret

# Modular crypt format: $2b$<cost>$<22 char salt><31 char digest>
BCRYPT_HASH_PATTERN = re.compile(r"^\$2[abxy]?\$(\d{2})\$[./A-Za-z0-9]{53}$")

# bcrypt only processes the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a fresh random salt per call, so hashing the same
    password twice yields two different secrets that both verify.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> secret = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", secret)
    True
    >>> service.verify("wrong_password", secret)
    False
    """

    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12,
            which is a good balance of security and performance.
            Higher values are more secure but slower.
        """
        if not self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS:
            msg = f"bcrypt rounds must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}"
            raise ValueError(msg)
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> StoredSecret:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The stored secret holding the bcrypt hash

        Raises
        ------
        PolicyViolationError
            If the password is longer than bcrypt can process, or is not
            encodable as UTF-8 (lone surrogates)
        """
        try:
            encoded = password.encode("utf-8")
        except UnicodeEncodeError:
            # The exception object holds the plaintext; do not chain it
            msg = "Password contains characters that cannot be encoded"
            raise PolicyViolationError(msg) from None
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            msg = f"Password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            raise PolicyViolationError(msg)

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(encoded, salt)
        return StoredSecret(hashed_value=hashed.decode("utf-8"))

    def verify(self, password: str, stored: StoredSecret | str) -> bool:
        """Verify a password against a stored secret.

        A malformed secret or an unencodable password never raises; it
        simply does not verify.

        Parameters
        ----------
        password
            The plaintext password to check
        stored
            The stored secret (or its raw hash string) to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        hashed_value = stored.hashed_value if isinstance(stored, StoredSecret) else stored
        if not isinstance(hashed_value, str) or not BCRYPT_HASH_PATTERN.match(hashed_value):
            return False

        try:
            encoded = password.encode("utf-8")
            if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
                return False
            return bcrypt.checkpw(encoded, hashed_value.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def needs_rehash(self, stored: StoredSecret | str) -> bool:
        """Check if a stored secret should be regenerated.

        This is useful when upgrading the work factor. After changing
        the rounds setting, existing hashes are upgraded on next login.

        Parameters
        ----------
        stored
            The existing secret to check

        Returns
        -------
        True if the hash should be regenerated
        """
        hashed_value = stored.hashed_value if isinstance(stored, StoredSecret) else stored
        match = BCRYPT_HASH_PATTERN.match(hashed_value or "")
        if match is None:
            return True
        return int(match.group(1)) != self._rounds
