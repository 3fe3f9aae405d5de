"""Registration service for user sign-up, login and token resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from client_register.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidPasswordFormatError,
    Phone,
    User,
)
from register_auth import (
    CredentialFailure,
    CredentialService,
    InvalidCredentialsError,
    TokenSignatureError,
)

if TYPE_CHECKING:
    from client_register.domain.user import UserRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Application service for user registration.

    Bridges the register_auth credential core with the User domain:
    - Registration (uniqueness check, password policy, hashing, token)
    - Login with password
    - Resolving the user behind a bearer token

    Transaction demarcation is left to the caller.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        credential_service: CredentialService,
    ):
        self._user_repo = user_repository
        self._credential_service = credential_service

    async def register_user(
        self,
        name: str,
        email: str,
        password: str,
        phones: Iterable[Phone] = (),
    ) -> User:
        email_obj = Email(email)
        logger.info("Registering user with email: %s", email_obj.value)

        identity_taken = await self._user_repo.exists_by_email(email_obj)
        outcome = self._credential_service.issue_credentials(
            email_obj.value,
            password,
            identity_taken=identity_taken,
        )

        if outcome.failure is CredentialFailure.DUPLICATE_IDENTITY:
            logger.warning("Registration attempt with existing email: %s", email_obj.value)
            raise EmailAlreadyExistsError(email_obj.value)
        if outcome.failure is CredentialFailure.POLICY_VIOLATION:
            logger.warning("Invalid password format for email: %s", email_obj.value)
            raise InvalidPasswordFormatError

        credentials = outcome.credentials
        user = User.create(
            name=name,
            email=email_obj,
            password_hash=credentials.secret.hashed_value,
            token=credentials.token.payload,
            phones=phones,
        )
        await self._user_repo.save(user)

        logger.info("User registered: %s (id: %s)", user.email, user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        # An address that could never have registered is just a failed login
        try:
            address = Email(email)
        except InvalidEmailError as e:
            raise InvalidCredentialsError from e

        user = await self._user_repo.find_by_email(address)
        if user is None or not user.is_active:
            raise InvalidCredentialsError

        password_service = self._credential_service.password_service
        if not password_service.verify(password, user.password_hash):
            logger.info("Failed login for: %s", user.email)
            raise InvalidCredentialsError

        if password_service.needs_rehash(user.password_hash):
            user.change_password_hash(password_service.hash(password).hashed_value)
            logger.info("Upgraded password hash for: %s", user.email)

        token = self._credential_service.jwt_service.issue(user.email)
        user.record_login(token.payload)
        await self._user_repo.save(user)

        logger.info("User logged in: %s", user.email)
        return user

    async def resolve_token(self, token: str) -> User:
        payload = self._credential_service.jwt_service.decode(token)

        user = await self._user_repo.find_by_email(payload.subject)
        if user is None or not user.is_active:
            msg = "Token subject is not a registered user"
            raise TokenSignatureError(msg)

        return user
