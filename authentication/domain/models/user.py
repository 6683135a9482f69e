import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class CustomUserManager(UserManager):
    """Email-first manager: ``username`` mirrors the e-mail address when omitted."""

    def create_user(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email)
        return super().create_user(username or email, email, password, **extra_fields)

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email)
        extra_fields.setdefault("role", CustomUser.ROLE_SELLER)
        return super().create_superuser(username or email, email, password, **extra_fields)


class CustomUser(AbstractUser):
    ROLE_CUSTOMER = "customer"
    ROLE_SELLER = "seller"

    ROLE_CHOICES = [
        (ROLE_CUSTOMER, "Customer"),
        (ROLE_SELLER, "Seller"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)

    # Role system - simple field
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"

    def is_seller(self):
        """Check if user manages a catalog"""
        return self.role == self.ROLE_SELLER

    def is_customer(self):
        return self.role == self.ROLE_CUSTOMER

    def __str__(self):
        return self.email
