from client_register.domain.user.value_objects.email import Email
from client_register.domain.user.value_objects.phone import Phone

__all__ = ["Email", "Phone"]
