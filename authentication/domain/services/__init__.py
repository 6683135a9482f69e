from .auth_service import AuthService
from .results import LoginResult


__all__ = ["AuthService", "LoginResult"]
