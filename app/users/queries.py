from __future__ import annotations

from typing import Iterable

from app.permissions import Capability, Role, require

from .models import User


def filter_users(users: Iterable[User], *, search: str = "", role: Role | None = None) -> list[User]:
    """Filter users by a name/email/id search and role, keeping input order."""

    needle = (search or "").strip().casefold()
    return [
        user
        for user in users
        if (not needle or any(needle in value.casefold() for value in (user.name, user.email, user.id)))
        and (role is None or user.role == role)
    ]


def list_users(viewer: User, users: Iterable[User], *, search: str = "", role: Role | None = None) -> list[User]:
    """User management listing; requires the manage-users capability."""

    require(viewer.role, Capability.MANAGE_USERS)
    return filter_users(users, search=search, role=role)
