"""Credential issuance: validate, hash, then sign.

Runs the three credential steps in order and stops at the first
failure, returning a typed outcome instead of raising.
"""

import logging

from register_auth.exceptions import PolicyViolationError
from register_auth.schemas import (
    CredentialFailure,
    CredentialOutcome,
    IssuedCredentials,
)
from register_auth.services.jwt_service import JWTService
from register_auth.services.password_policy import PasswordValidator
from register_auth.services.password_service import PasswordHashingService

logger = logging.getLogger(__name__)


class CredentialService:
    """Issues a stored secret and a token for a new identity.

    Built once at startup with its collaborators and shared by
    reference; it holds no mutable state of its own.
    """

    def __init__(
        self,
        validator: PasswordValidator,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._validator = validator
        self._password_service = password_service
        self._jwt_service = jwt_service

    @property
    def password_service(self) -> PasswordHashingService:
        return self._password_service

    @property
    def jwt_service(self) -> JWTService:
        return self._jwt_service

    def issue_credentials(
        self,
        identity: str,
        password: str,
        *,
        identity_taken: bool = False,
    ) -> CredentialOutcome:
        """Validate and hash ``password``, then issue a token for ``identity``.

        Parameters
        ----------
        identity
            The unique key naming the principal (e.g. an email)
        password
            The candidate plaintext password
        identity_taken
            Result of the caller's uniqueness pre-check. When True nothing
            is hashed.

        Returns
        -------
        CredentialOutcome with the issued credentials or the failure kind
        """
        if identity_taken:
            logger.info("Credential issuance refused, identity exists: %s", identity)
            return CredentialOutcome.failed(CredentialFailure.DUPLICATE_IDENTITY)

        if not self._validator.validate(password):
            logger.info("Password rejected by policy for: %s", identity)
            return CredentialOutcome.failed(CredentialFailure.POLICY_VIOLATION)

        try:
            secret = self._password_service.hash(password)
        except PolicyViolationError as e:
            logger.info("Password rejected by hasher for %s: %s", identity, e.message)
            return CredentialOutcome.failed(CredentialFailure.POLICY_VIOLATION)

        token = self._jwt_service.issue(identity)
        logger.debug("Credentials issued for: %s", identity)

        return CredentialOutcome.success(
            IssuedCredentials(identity=identity, secret=secret, token=token),
        )
