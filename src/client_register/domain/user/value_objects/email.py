"""Email value object.

The normalized address is the user's identity and the subject of every
token issued for them.
"""

import re
from dataclasses import dataclass

from client_register.domain.user.exceptions import InvalidEmailError

# local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class Email:
    """A syntactically valid, lowercase email address."""

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)
        if EMAIL_PATTERN.fullmatch(normalized) is None:
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
