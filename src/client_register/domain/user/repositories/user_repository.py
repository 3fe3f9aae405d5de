"""Persistence port for registered users."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from client_register.domain.user.aggregates.user import User
from client_register.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Stores and loads User aggregates, phones included.

    Email arguments may be raw strings; implementations normalize them
    through ``Email`` and so raise ``InvalidEmailError`` for malformed
    input.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Load the user with ``user_id``, or None."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Load the user registered under ``email``, or None."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Tell whether ``email`` is already registered.

        Cheaper than ``find_by_email``: no user is materialized.
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """Insert ``user`` or update its mutable state.

        Raises
        ------
        EmailAlreadyExistsError
            If another user claimed the email concurrently
        """
