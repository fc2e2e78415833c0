"""User account service layer.

Backed by Django's auth user model and groups.  Newly registered users
get the ``USER`` role; administrators confirm their own password before
disabling or deleting another account.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import transaction

from modules.accounts.exceptions import InvalidCredentials, UsernameTaken, UserNotFound
from modules.core.exceptions import InvalidInput
from modules.core.identity import Role

if TYPE_CHECKING:
    from modules.accounts.dtos import (
        ChangePasswordDTO,
        ConfirmPasswordDTO,
        RegisterUserDTO,
    )
    from modules.core.identity import CallerIdentity

logger = structlog.get_logger(__name__)

User = get_user_model()


class AccountService:
    """Application service for user accounts."""

    @transaction.atomic
    def register_user(self, dto: RegisterUserDTO, *, caller: CallerIdentity) -> Any:
        """Create an account holding the ``USER`` role.

        Raises:
            UsernameTaken: the (lowercased) username already exists.
        """
        if User.objects.filter(username__iexact=dto.username).exists():
            raise UsernameTaken(f"Username {dto.username} already exists.")

        user = User.objects.create_user(
            username=dto.username,
            password=dto.password,
            first_name=dto.first_name,
            last_name=dto.last_name,
        )
        group, _ = Group.objects.get_or_create(name=Role.USER.value)
        user.groups.add(group)

        logger.info("account.registered", username=user.username, actor=caller.username)
        return user

    @transaction.atomic
    def change_password(
        self, user: Any, dto: ChangePasswordDTO, *, caller: CallerIdentity
    ) -> None:
        """Replace ``user``'s password after checking the current one.

        Raises:
            InvalidCredentials: ``old_password`` does not match.
        """
        if not user.check_password(dto.old_password):
            raise InvalidCredentials("old_password")
        user.set_password(dto.new_password)
        user.save(update_fields=["password"])
        logger.info("account.password_changed", username=user.get_username(), actor=caller.username)

    @transaction.atomic
    def set_active(
        self,
        admin: Any,
        username: str,
        active: bool,
        dto: ConfirmPasswordDTO,
        *,
        caller: CallerIdentity,
    ) -> Any:
        """Enable or disable another account.

        Raises:
            InvalidCredentials: the administrator's password does not match.
            UserNotFound: no account named ``username``.
            InvalidInput: the administrator targets their own account.
        """
        target = self._target(admin, username, dto)
        target.is_active = active
        target.save(update_fields=["is_active"])
        logger.info(
            "account.enabled" if active else "account.disabled",
            username=target.username,
            actor=caller.username,
        )
        return target

    @transaction.atomic
    def delete_user(
        self, admin: Any, username: str, dto: ConfirmPasswordDTO, *, caller: CallerIdentity
    ) -> None:
        """Permanently remove another account.

        Raises:
            InvalidCredentials: the administrator's password does not match.
            UserNotFound: no account named ``username``.
            InvalidInput: the administrator targets their own account.
        """
        target = self._target(admin, username, dto)
        target.delete()
        logger.info("account.deleted", username=username.lower(), actor=caller.username)

    def _target(self, admin: Any, username: str, dto: ConfirmPasswordDTO) -> Any:
        if not admin.check_password(dto.password):
            raise InvalidCredentials()

        target = User.objects.filter(username__iexact=username).first()
        if target is None:
            raise UserNotFound(f"User {username} not found.")
        if target.pk == admin.pk:
            raise InvalidInput({"username": "Administrators cannot target their own account."})
        return target
