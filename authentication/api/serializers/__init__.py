from .auth_serializers import LoginSerializer, SignupSerializer, UserSerializer
from .jwt_serializers import CustomRefreshToken


__all__ = [
    "UserSerializer",
    "SignupSerializer",
    "LoginSerializer",
    "CustomRefreshToken",
]
