"""User schemas for request/response models.

Field names are exposed in camelCase (``cityCode``, ``isActive``...);
snake_case names are accepted on input as well.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from client_register.domain.user import Phone, User


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PhoneSchema(_CamelModel):
    """A phone number as sent and returned by the API."""

    number: str = Field(..., min_length=1, max_length=32)
    city_code: str = Field(..., min_length=1, max_length=8)
    country_code: str = Field(..., min_length=1, max_length=8)

    def to_domain(self) -> Phone:
        return Phone(
            number=self.number,
            city_code=self.city_code,
            country_code=self.country_code,
        )

    @classmethod
    def from_domain(cls, phone: Phone) -> "PhoneSchema":
        return cls(
            number=phone.number,
            city_code=phone.city_code,
            country_code=phone.country_code,
        )


class RegisterUserRequest(_CamelModel):
    """Request schema for user registration.

    The password format is checked by the service against the configured
    policy, not here.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., max_length=128, description="Password")
    phones: list[PhoneSchema] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Juan Rodriguez",
                "email": "juan@rodriguez.org",
                "password": "Hunter22",
                "phones": [
                    {"number": "1234567", "cityCode": "1", "countryCode": "57"},
                ],
            },
        },
    )


class LoginRequest(_CamelModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., max_length=128)


class UserResponse(_CamelModel):
    """Response schema for a registered user."""

    id: UUID
    name: str
    email: str
    created: datetime
    modified: datetime
    last_login: datetime
    is_active: bool
    token: str
    phones: list[PhoneSchema]

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created=user.created_at,
            modified=user.modified_at,
            last_login=user.last_login_at,
            is_active=user.is_active,
            token=user.token,
            phones=[PhoneSchema.from_domain(phone) for phone in user.phones],
        )
