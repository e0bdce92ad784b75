"""
Custom permission classes shared by the companies, members and
food_summaries apps.
"""
from rest_framework.permissions import BasePermission


class IsCompanyOwner(BasePermission):
    """
    Permission: User must own the company the object belongs to.

    Works for Company instances and for any object with a ``company``
    attribute (Member, FoodSummary, Topup, ...).

    Usage:
        permission_classes = [IsAuthenticated, IsCompanyOwner]
    """

    message = 'You must own this company to access its records.'

    def has_object_permission(self, request, view, obj):
        company = getattr(obj, 'company', obj)
        return company.is_owned_by(request.user)
