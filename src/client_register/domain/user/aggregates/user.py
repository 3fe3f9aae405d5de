from datetime import datetime
from typing import Iterable, Optional, Union
from uuid import UUID, uuid4

from client_register.domain.shared.time import utc_now
from client_register.domain.user.value_objects import Email, Phone


class User:
    """
    A registered user.

    Identified by a random UUID; the normalized email is unique across
    users and is the subject of the user's tokens. Only the bcrypt hash of
    the password is held. Phones are fixed at registration.
    """

    def __init__(  # NOQA: PLR0913
        self,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        token: str,
        phones: Iterable[Phone] = (),
        is_active: bool = True,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        modified_at: Optional[datetime] = None,
        last_login_at: Optional[datetime] = None,
    ):
        now = utc_now()
        self._id = id or uuid4()
        self._name = name
        self._email = Email(email) if isinstance(email, str) else email
        self._password_hash = password_hash
        self._token = token
        self._phones = tuple(phones)
        self._is_active = is_active
        self._created_at = created_at or now
        self._modified_at = modified_at or now
        self._last_login_at = last_login_at or now

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def token(self) -> str:
        """Payload of the most recently issued token."""
        return self._token

    @property
    def phones(self) -> tuple[Phone, ...]:
        return self._phones

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def modified_at(self) -> datetime:
        return self._modified_at

    @property
    def last_login_at(self) -> datetime:
        return self._last_login_at

    def _touch(self) -> datetime:
        self._modified_at = utc_now()
        return self._modified_at

    def record_login(self, token: str) -> None:
        """Keep ``token`` as the current one and stamp the login time."""
        self._token = token
        self._last_login_at = self._touch()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._touch()

    def deactivate(self) -> None:
        self._is_active = False
        self._touch()

    @classmethod
    def create(
        cls,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        token: str,
        phones: Iterable[Phone] = (),
    ) -> "User":
        """Register a new, active user.

        Creation, modification and last login all share one timestamp:
        registering counts as the first login.
        """
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            token=token,
            phones=phones,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        name: str,
        email: Union[str, Email],
        password_hash: str,
        token: str,
        phones: Iterable[Phone],
        is_active: bool,
        created_at: datetime,
        modified_at: datetime,
        last_login_at: datetime,
    ) -> "User":
        """Rebuild a stored user without touching any timestamp."""
        return cls(
            id=id,
            name=name,
            email=email,
            password_hash=password_hash,
            token=token,
            phones=phones,
            is_active=is_active,
            created_at=created_at,
            modified_at=modified_at,
            last_login_at=last_login_at,
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, User):
            return self._id == other._id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self.email})"
