"""
Member management service.

Handles member records. Balances are never written here; see
deposit_management and apps.ledger.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.companies.models import Company
from apps.companies.services import CompanyNotFoundError
from apps.members.models import Member

from .exceptions import MemberNotFoundError

UPDATABLE_FIELDS = ('name', 'email', 'designation', 'role', 'active')


@transaction.atomic
def create_member(
    *,
    company_id: UUID,
    name: str,
    email: str,
    designation: str = '',
    role: str = ''
) -> Member:
    """
    Add an active member with a zero balance to a company.

    Raises:
        CompanyNotFoundError: If company doesn't exist
    """
    if not Company.objects.filter(id=company_id).exists():
        raise CompanyNotFoundError(f"Company with ID {company_id} not found")

    return Member.objects.create(
        company_id=company_id,
        name=name,
        email=email,
        designation=designation,
        role=role,
    )


def list_members(
    *,
    owner,
    company_id: Optional[UUID] = None,
    active: Optional[bool] = None
) -> QuerySet[Member]:
    """
    Members of the companies ``owner`` owns, ordered by name.

    ``active`` filters on the active flag when given; None returns both.
    """
    queryset = Member.objects.filter(company__owner=owner).select_related('company')
    if company_id:
        queryset = queryset.filter(company_id=company_id)
    if active is not None:
        queryset = queryset.filter(active=active)
    return queryset.order_by('name', 'created_at')


@transaction.atomic
def update_member(*, member_id: UUID, **fields) -> Member:
    """
    Update member profile fields.

    Only name, email, designation, role and active may be changed.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    try:
        member = Member.objects.select_for_update().get(id=member_id)
    except Member.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found")

    changed = [name for name in UPDATABLE_FIELDS if name in fields]
    for name in changed:
        setattr(member, name, fields[name])

    if changed:
        member.save(update_fields=changed + ['updated_at'])

    return member


def deactivate_member(*, member_id: UUID) -> Member:
    """
    Deactivate a member.

    Inactive members keep their balance and history but are no longer
    offered for new food summaries.

    Raises:
        MemberNotFoundError: If member doesn't exist
    """
    return update_member(member_id=member_id, active=False)
