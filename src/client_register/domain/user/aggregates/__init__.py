from client_register.domain.user.aggregates.user import User

__all__ = ["User"]
