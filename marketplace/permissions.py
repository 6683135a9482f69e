from rest_framework import permissions

from utils.rbac import is_customer, is_seller


class IsSellerUser(permissions.BasePermission):
    """
    Allows access only to authenticated users whose stored role is seller.
    """

    message = "Access denied: seller role required"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_seller(request.user))


class IsCustomerUser(permissions.BasePermission):
    """
    Allows access only to authenticated users whose stored role is customer.
    """

    message = "Access denied: customer role required"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_customer(request.user))
