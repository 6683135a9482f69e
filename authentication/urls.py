from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.views import LoginAPIView, SignupAPIView

urlpatterns = [
    path("signup", SignupAPIView.as_view(), name="signup"),
    path("login", LoginAPIView.as_view(), name="login"),
    path("token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
]
