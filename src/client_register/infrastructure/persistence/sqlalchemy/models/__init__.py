from client_register.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from client_register.infrastructure.persistence.sqlalchemy.models.user_model import (
    PhoneModel,
    UserModel,
)

__all__ = ["Base", "PhoneModel", "TimestampMixin", "UserModel"]
