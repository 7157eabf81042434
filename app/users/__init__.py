"""Users and their roles."""

from .models import User
from .queries import filter_users, list_users
from .repository import UserNotFoundError, UserRepository

__all__ = ["User", "UserNotFoundError", "UserRepository", "filter_users", "list_users"]
