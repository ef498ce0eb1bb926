from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Back-office user profile."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'display_name',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
