"""Caller identity and role-based access policy.

The service layer never reads "the current user" from ambient state:
views build a ``CallerIdentity`` from the authenticated request user and
pass it explicitly (``caller=...``) into every lifecycle operation.

Roles map onto Django auth groups with the same names (see the
``core`` data migration).  Superusers always carry ``ADMIN``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, FrozenSet

from rest_framework.permissions import SAFE_METHODS, BasePermission


class Role(StrEnum):
    USER = "USER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"


ELEVATED_ROLES: FrozenSet[Role] = frozenset({Role.MANAGER, Role.ADMIN})


@dataclass(frozen=True)
class CallerIdentity:
    """Who is invoking a service operation, and with which roles."""

    username: str
    roles: FrozenSet[Role] = field(default_factory=frozenset)

    @property
    def can_read(self) -> bool:
        return bool(self.roles)

    @property
    def can_write(self) -> bool:
        return bool(self.roles & ELEVATED_ROLES)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @classmethod
    def from_user(cls, user: Any) -> CallerIdentity:
        """Resolve roles for a Django user (anonymous users get none)."""
        if user is None or not getattr(user, "is_authenticated", False):
            return cls(username="anonymous")

        roles = set()
        if getattr(user, "is_superuser", False):
            roles.add(Role.ADMIN)
        group_names = user.groups.values_list("name", flat=True)
        roles.update(Role(name) for name in group_names if name in Role.__members__)
        return cls(username=user.get_username(), roles=frozenset(roles))

    @classmethod
    def system(cls) -> CallerIdentity:
        """Identity used by management commands and other internal callers."""
        return cls(username="system", roles=frozenset({Role.ADMIN}))


class OrderAccessPolicy(BasePermission):
    """Reads need any role; writes need ``MANAGER`` or ``ADMIN``."""

    message = "Your role does not allow this operation."

    def has_permission(self, request, view) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        caller = CallerIdentity.from_user(request.user)
        if request.method in SAFE_METHODS:
            return caller.can_read
        return caller.can_write


class RoleHolderPolicy(BasePermission):
    """Any authenticated caller holding at least one role."""

    message = "Your account has no role assigned."

    def has_permission(self, request, view) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        return CallerIdentity.from_user(request.user).can_read


class AdminOnlyPolicy(BasePermission):
    """Account administration is reserved to ``ADMIN``."""

    message = "Only administrators may manage user accounts."

    def has_permission(self, request, view) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        return CallerIdentity.from_user(request.user).is_admin
