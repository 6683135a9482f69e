"""
AuthService - signup and login.

Issues JWT access/refresh pairs for e-mail/password accounts. Google single
sign-on is handled outside this service.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from marketplace.services.base import ErrorCodes
from utils.logging_utils import mask_value

from .results import LoginResult


User = get_user_model()
logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service encapsulating signup and login."""

    def signup(self, name: str, email: str, password: str, role: str = User.ROLE_CUSTOMER) -> LoginResult:
        """
        Create an account and sign it in.

        Duplicate e-mail addresses are reported as a conflict, whether caught
        by the lookup or by the unique index when two signups race.
        """
        if User.objects.filter(email__iexact=email).exists():
            logger.info(f"Signup rejected, email already registered: {mask_value(email)}")
            return LoginResult(success=False, error=ErrorCodes.CONFLICT, message="User already exists")

        try:
            user = User.objects.create_user(email=email, password=password, name=name, role=role)
        except IntegrityError:
            return LoginResult(success=False, error=ErrorCodes.CONFLICT, message="User already exists")
        except Exception as e:
            logger.exception(f"Signup error for email {mask_value(email)}: {e}")
            return LoginResult(success=False, error=ErrorCodes.INTERNAL_ERROR, message="Internal server error")

        logger.info(f"User {user.id} signed up as {user.role}")
        result = self._generate_login_tokens(user)
        result.message = "User created successfully"
        return result

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate user with email/password.

        Unknown e-mail and wrong password give the same answer so that
        callers cannot probe for registered addresses.
        """
        if not email or not password:
            return LoginResult(
                success=False, error=ErrorCodes.INVALID_INPUT, message="Email and password are required"
            )

        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.check_password(password) or not user.is_active:
            logger.info(f"Login failed for {mask_value(email)}")
            return LoginResult(success=False, error=ErrorCodes.UNAUTHORIZED, message="Invalid credentials")

        return self._generate_login_tokens(user)

    def _generate_login_tokens(self, user) -> LoginResult:
        """Generate JWT tokens for successful login."""
        try:
            refresh = CustomRefreshToken.for_user(user)
            return LoginResult(
                success=True,
                user=user,
                access_token=str(refresh.access_token),
                refresh_token=str(refresh),
                message="Login successful",
            )
        except Exception as e:
            logger.exception(f"Token generation failed for user {user.id}: {e}")
            return LoginResult(
                success=False, error=ErrorCodes.INTERNAL_ERROR, message="Failed to generate authentication tokens."
            )
