"""SQLAlchemy implementation for client_register persistence.

Provides:
- Base: Declarative base for all models
- UserModel / PhoneModel: tables for the User aggregate
- UserRepositorySQLAlchemy: Repository implementation
"""

from client_register.infrastructure.persistence.sqlalchemy.models import (
    Base,
    PhoneModel,
    UserModel,
)
from client_register.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = ["Base", "PhoneModel", "UserModel", "UserRepositorySQLAlchemy"]
