"""Application layer services."""

from client_register.application.services.registration_service import (
    RegistrationService,
)

__all__ = ["RegistrationService"]
