"""
Company management service.

Handles the company profile. The balance and last topup date are never
written here; see topup_management and apps.ledger.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.companies.models import Company

from .exceptions import CompanyNotFoundError, InsufficientPermissionsError

UPDATABLE_FIELDS = ('name', 'email', 'website', 'bread_price')


@transaction.atomic
def create_company(
    *,
    owner,
    name: str,
    email: str = '',
    website: str = '',
    bread_price: Optional[int] = None
) -> Company:
    """
    Create a company owned by ``owner`` with a zero balance.

    Args:
        owner: User who owns the company
        name: Company name
        email: Contact email (optional)
        website: Website URL (optional)
        bread_price: Reference price of one bread, minor units (optional)

    Returns:
        Created Company instance
    """
    return Company.objects.create(
        owner=owner,
        name=name,
        email=email,
        website=website,
        bread_price=bread_price,
    )


def get_company_for_owner(*, owner) -> Company:
    """
    Get the first company owned by ``owner``.

    Raises:
        CompanyNotFoundError: If the user owns no company yet
    """
    company = list_companies(owner=owner).first()
    if company is None:
        raise CompanyNotFoundError("You have not set up a company yet")
    return company


def list_companies(*, owner) -> QuerySet[Company]:
    """All companies owned by ``owner``, oldest first."""
    return Company.objects.filter(owner=owner).order_by('created_at')


@transaction.atomic
def update_company(*, company_id: UUID, user, **fields) -> Company:
    """
    Update company profile fields (owner only).

    Only name, email, website and bread_price may be changed; anything
    else passed in ``fields`` is ignored.

    Raises:
        CompanyNotFoundError: If company doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    try:
        company = Company.objects.select_for_update().get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError(f"Company with ID {company_id} not found")

    if not company.is_owned_by(user):
        raise InsufficientPermissionsError("Only the company owner can update the company")

    changed = [name for name in UPDATABLE_FIELDS if name in fields]
    for name in changed:
        setattr(company, name, fields[name])

    if changed:
        company.save(update_fields=changed + ['updated_at'])

    return company
