"""Phone value object."""

from dataclasses import dataclass

from client_register.domain.user.exceptions import InvalidPhoneError


@dataclass(frozen=True)
class Phone:
    """A phone number registered for a user."""

    number: str
    city_code: str
    country_code: str

    def __post_init__(self) -> None:
        for field_name in ("number", "city_code", "country_code"):
            value = (getattr(self, field_name) or "").strip()
            if not value:
                msg = f"Phone {field_name} cannot be empty"
                raise InvalidPhoneError(msg)
            object.__setattr__(self, field_name, value)
