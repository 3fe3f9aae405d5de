"""Password format validation against the configured policy."""

from register_auth.exceptions import PolicyViolationError
from register_auth.schemas import PasswordPolicy


def validate(candidate: str, policy: PasswordPolicy) -> bool:
    """Return True iff ``candidate`` matches the whole policy pattern."""
    return policy.pattern.fullmatch(candidate) is not None


class PasswordValidator:
    """Checks candidate passwords against one shared PasswordPolicy.

    Examples
    --------
    >>> validator = PasswordValidator(PasswordPolicy.from_regex(r"^(?=.*\\d).{8,}$"))
    >>> validator.validate("password1")
    True
    >>> validator.validate("password")
    False
    """

    def __init__(self, policy: PasswordPolicy):
        self._policy = policy

    @property
    def policy(self) -> PasswordPolicy:
        return self._policy

    def validate(self, candidate: str) -> bool:
        return validate(candidate, self._policy)

    def require_valid(self, candidate: str) -> None:
        """Raise PolicyViolationError if ``candidate`` does not match.

        The candidate itself is never part of the error message.
        """
        if not self.validate(candidate):
            raise PolicyViolationError
