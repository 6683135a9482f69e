"""
Response Serializers for API Documentation

These serializers define the structure of API responses for OpenAPI schema generation.
They are NOT used for data validation, only for documentation in Swagger/ReDoc.
"""

from rest_framework import serializers

from .auth_serializers import UserSerializer


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=False)
    message = serializers.CharField(help_text="Human readable error")


class LoginResponseSerializer(serializers.Serializer):
    """Response for successful login"""

    success = serializers.BooleanField(default=True)
    token = serializers.CharField(help_text="JWT access token")
    refreshToken = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(help_text="User details")


class SignupResponseSerializer(LoginResponseSerializer):
    message = serializers.CharField(help_text="Success message")
