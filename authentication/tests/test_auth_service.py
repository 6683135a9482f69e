from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import AccessToken

from authentication.domain.services.auth_service import AuthService
from marketplace.services.base import ErrorCodes
from marketplace.tests.factories import CustomerFactory, SellerFactory

User = get_user_model()


@pytest.mark.unit
@pytest.mark.django_db
class TestAuthService:
    def setup_method(self):
        self.service = AuthService()

    def test_signup_creates_account_and_tokens(self):
        result = self.service.signup(name="Ada", email="ada@example.com", password="s3cret!", role="seller")

        assert result.success
        assert result.message == "User created successfully"
        assert result.user.role == User.ROLE_SELLER
        assert result.user.check_password("s3cret!")
        assert result.user.password != "s3cret!"
        assert result.access_token and result.refresh_token

    def test_signup_rejects_existing_email(self):
        CustomerFactory(email="ada@example.com")

        result = self.service.signup(name="Ada", email="ADA@example.com", password="pw")

        assert not result.success
        assert result.error == ErrorCodes.CONFLICT
        assert result.message == "User already exists"
        assert User.objects.filter(email__iexact="ada@example.com").count() == 1

    def test_access_token_carries_identity_claims(self):
        seller = SellerFactory(email="shop@example.com", password="pw")

        result = self.service.login("shop@example.com", "pw")

        token = AccessToken(result.access_token)
        assert token["id"] == str(seller.id)
        assert token["email"] == "shop@example.com"
        assert token["role"] == "seller"

    @pytest.mark.parametrize("email, password", [("shop@example.com", "wrong"), ("nobody@example.com", "pw")])
    def test_login_failures_look_the_same(self, email, password):
        SellerFactory(email="shop@example.com", password="pw")

        result = self.service.login(email, password)

        assert result.error == ErrorCodes.UNAUTHORIZED
        assert result.message == "Invalid credentials"
        assert result.access_token is None

    def test_login_requires_both_fields(self):
        result = self.service.login("shop@example.com", "")

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_inactive_user_cannot_login(self):
        CustomerFactory(email="gone@example.com", password="pw", is_active=False)

        assert self.service.login("gone@example.com", "pw").error == ErrorCodes.UNAUTHORIZED

    def test_token_failure_is_internal_error(self):
        CustomerFactory(email="ada@example.com", password="pw")

        with patch(
            "authentication.domain.services.auth_service.CustomRefreshToken.for_user",
            side_effect=RuntimeError("signing key missing"),
        ):
            result = self.service.login("ada@example.com", "pw")

        assert result.error == ErrorCodes.INTERNAL_ERROR
