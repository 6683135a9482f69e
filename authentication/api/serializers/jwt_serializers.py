from rest_framework_simplejwt.tokens import RefreshToken


class CustomRefreshToken(RefreshToken):
    """Refresh token whose access tokens carry ``id``, ``email`` and ``role``."""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)

        # Add custom claims (copied onto every access token derived from this one)
        token["email"] = user.email
        token["role"] = user.role

        return token
