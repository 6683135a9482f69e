from .auth_views import LoginAPIView, SignupAPIView

__all__ = ["LoginAPIView", "SignupAPIView"]
