"""Read serializers for user accounts."""

from __future__ import annotations

from typing import List

from django.contrib.auth import get_user_model
from rest_framework import serializers

from modules.core.identity import CallerIdentity


class UserSerializer(serializers.ModelSerializer):
    roles = serializers.SerializerMethodField()

    class Meta:
        model = get_user_model()
        fields = ["username", "first_name", "last_name", "is_active", "roles"]
        read_only_fields = fields

    def get_roles(self, obj) -> List[str]:
        return sorted(CallerIdentity.from_user(obj).roles)
