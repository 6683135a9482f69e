"""
Role checks for sellers and customers.

The role is read from the database on every check, so a role change takes
effect immediately even for access tokens issued before it.
"""

from django.contrib.auth import get_user_model

ROLE_CUSTOMER = "customer"
ROLE_SELLER = "seller"


def _stored_role(user):
    if not getattr(user, "is_authenticated", False):
        return None
    User = get_user_model()
    return User.objects.filter(pk=getattr(user, "pk", None)).values_list("role", flat=True).first()


def has_role(user, role: str) -> bool:
    return _stored_role(user) == role


def is_seller(user) -> bool:
    return has_role(user, ROLE_SELLER)


def is_customer(user) -> bool:
    return has_role(user, ROLE_CUSTOMER)
