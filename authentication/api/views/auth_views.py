from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.views import APIView

from authentication.api.serializers import LoginSerializer, SignupSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    LoginResponseSerializer,
    SignupResponseSerializer,
)
from authentication.domain.services.auth_service import AuthService
from marketplace.api.responses import error_response, success_response, validation_error_response


# Dependency Injection Helper
def get_auth_service():
    """Factory to get AuthService instance."""
    return AuthService()


def _token_payload(result):
    return {
        "token": result.access_token,
        "refreshToken": result.refresh_token,
        "user": UserSerializer(result.user).data,
    }


class SignupAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_signup",
        summary="Create an account",
        description="""
        Create a seller or customer account and sign it in.

        `role` is optional and defaults to `customer`.
        """,
        request=SignupSerializer,
        responses={
            201: OpenApiResponse(
                response=SignupResponseSerializer,
                description="Account created",
                examples=[
                    OpenApiExample(
                        "Successful Signup",
                        value={
                            "success": True,
                            "message": "User created successfully",
                            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "name": "Ada",
                                "email": "ada@example.com",
                                "role": "seller",
                            },
                        },
                    )
                ],
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing fields or invalid role"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="User already exists"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = get_auth_service().signup(**serializer.validated_data)
        if not result.success:
            return error_response(result.error, result.message)

        return success_response(
            {"message": result.message, **_token_payload(result)},
            status_code=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(response=LoginResponseSerializer, description="Login successful"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Email or password missing"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = get_auth_service().login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if not result.success:
            return error_response(result.error, result.message)

        return success_response(_token_payload(result))
