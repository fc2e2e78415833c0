"""User account API views.

Registration, enabling, disabling and deleting accounts are reserved to
administrators; any caller holding a role may change their own password.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import ChangePasswordDTO, ConfirmPasswordDTO, RegisterUserDTO
from modules.accounts.serializers import UserSerializer
from modules.accounts.services import AccountService
from modules.core.identity import AdminOnlyPolicy, CallerIdentity, RoleHolderPolicy
from modules.core.validation import parse_dto


class UserViewSet(GenericViewSet):
    queryset = get_user_model().objects.all()
    serializer_class = UserSerializer
    lookup_field = "username"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = AccountService()

    def get_permissions(self):
        if self.action == "change_password":
            return [RoleHolderPolicy()]
        return [AdminOnlyPolicy()]

    @extend_schema(request=RegisterUserDTO, responses=UserSerializer)
    @action(detail=False, methods=["post"], url_path="register")
    def register(self, request: Request) -> Response:
        """POST /api/v1/users/register/"""
        dto = parse_dto(RegisterUserDTO, request.data)
        user = self._service.register_user(
            dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ChangePasswordDTO, responses={204: None})
    @action(detail=False, methods=["put"], url_path="change-password")
    def change_password(self, request: Request) -> Response:
        """PUT /api/v1/users/change-password/"""
        dto = parse_dto(ChangePasswordDTO, request.data)
        self._service.change_password(
            request.user, dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ConfirmPasswordDTO, responses=UserSerializer)
    @action(detail=True, methods=["post"])
    def enable(self, request: Request, username: str | None = None) -> Response:
        """POST /api/v1/users/{username}/enable/"""
        return self._set_active(request, username, active=True)

    @extend_schema(request=ConfirmPasswordDTO, responses=UserSerializer)
    @action(detail=True, methods=["post"])
    def disable(self, request: Request, username: str | None = None) -> Response:
        """POST /api/v1/users/{username}/disable/"""
        return self._set_active(request, username, active=False)

    @extend_schema(request=ConfirmPasswordDTO, responses={204: None})
    def destroy(self, request: Request, username: str | None = None) -> Response:
        """DELETE /api/v1/users/{username}/"""
        dto = parse_dto(ConfirmPasswordDTO, request.data)
        self._service.delete_user(
            request.user, username, dto, caller=CallerIdentity.from_user(request.user)
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _set_active(self, request: Request, username: str, *, active: bool) -> Response:
        dto = parse_dto(ConfirmPasswordDTO, request.data)
        user = self._service.set_active(
            request.user,
            username,
            active,
            dto,
            caller=CallerIdentity.from_user(request.user),
        )
        return Response(UserSerializer(user).data)
