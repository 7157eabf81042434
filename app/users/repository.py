from __future__ import annotations

from app.permissions import Role
from app.storage import InMemoryStore, NotFoundError

from .models import User


class UserNotFoundError(NotFoundError):
    """Raised when a user could not be located."""


class UserRepository(InMemoryStore[User]):
    not_found_error = UserNotFoundError
    kind = "User"

    def with_role(self, role: Role) -> list[User]:
        return [user for user in self.list() if user.role == role]

    def technicians(self) -> list[User]:
        return self.with_role(Role.MAINTENANCE_TECHNICIAN)

    def display_name(self, identity: str | None) -> str | None:
        """Resolve a user id to a name, passing through unknown identities."""

        if identity is None:
            return None
        user = self.find(identity)
        return user.name if user is not None else identity
