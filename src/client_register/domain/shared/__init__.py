"""Error codes, the domain exception hierarchy and UTC time helpers."""

from client_register.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    ErrorCode,
    ValidationError,
)
from client_register.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "ErrorCode",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
