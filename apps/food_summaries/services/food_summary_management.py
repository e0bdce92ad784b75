"""
Food summary management service.

settle_food_summary and reverse_food_summary are the only ways a food
summary enters or leaves the database, and each runs in one
transaction together with its ledger batch:

    Draft (unsaved input) --settle--> Settled --reverse--> deleted

Everything that can be validated is validated before the transaction
starts, so invalid input never touches a balance.
"""

import logging
from datetime import date as date_type
from typing import Iterable, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.companies.models import Company
from apps.companies.services import CompanyNotFoundError
from apps.food_summaries.models import FoodSummary, ExtraMember
from apps.ledger.applier import LedgerBatch, LedgerSnapshot, apply_batch
from apps.ledger.exceptions import InvalidAmountError
from apps.ledger.money import require_amount
from apps.members.models import Member

from .exceptions import InvalidInputError, SummaryNotFoundError
from .participants import ExtraHeadcount, resolve_participants
from .settlement import compute_settlement, compute_reversal

logger = logging.getLogger(__name__)


def _prepare_settlement(
    *,
    company_id: UUID,
    total_amount: int,
    breads_amount: int,
    exempt_member_ids: Iterable[UUID],
    owing_member_ids: Optional[Iterable[UUID]],
    extras: Iterable[ExtraHeadcount]
):
    if not Company.objects.filter(id=company_id).exists():
        raise CompanyNotFoundError(f"Company with ID {company_id} not found")

    active_ids = set(
        Member.objects
        .filter(company_id=company_id, active=True)
        .values_list('id', flat=True)
    )
    exempt = set(exempt_member_ids)
    if owing_member_ids is None:
        owing = active_ids - exempt
    else:
        owing = set(owing_member_ids)

    participants = resolve_participants(
        members=active_ids,
        exempt=exempt,
        owing=owing,
        extras=extras,
    )
    batch = compute_settlement(
        company_id=company_id,
        total_amount=total_amount,
        breads_amount=breads_amount,
        participants=participants,
    )
    return exempt, owing, batch


def preview_settlement(
    *,
    company_id: UUID,
    total_amount: int,
    breads_amount: int,
    exempt_member_ids: Iterable[UUID] = (),
    owing_member_ids: Optional[Iterable[UUID]] = None,
    extras: Iterable[ExtraHeadcount] = ()
) -> LedgerBatch:
    """
    Compute the deltas a food summary would apply, without saving it.

    Takes the same participant arguments as settle_food_summary and
    raises the same validation errors.
    """
    _, _, batch = _prepare_settlement(
        company_id=company_id,
        total_amount=total_amount,
        breads_amount=breads_amount,
        exempt_member_ids=exempt_member_ids,
        owing_member_ids=owing_member_ids,
        extras=list(extras),
    )
    return batch


def settle_food_summary(
    *,
    company_id: UUID,
    date: date_type,
    total_amount: int,
    breads_amount: int,
    curries_amount: int,
    extra_stuff_amount: int = 0,
    exempt_member_ids: Iterable[UUID] = (),
    owing_member_ids: Optional[Iterable[UUID]] = None,
    extras: Iterable[ExtraHeadcount] = ()
) -> Tuple[FoodSummary, LedgerSnapshot]:
    """
    Record a food summary and settle it against the ledger.

    The company pays for the bread; the rest of ``total_amount`` is
    split between the billed members by weight (see participants).
    ``total_amount`` is trusted to already equal breads + curries +
    extra stuff; the API layer checks that.

    Args:
        company_id: UUID of the company
        date: Date of the lunch
        total_amount: Total cost in minor units
        breads_amount: Bread cost, paid by the company
        curries_amount: Curry cost
        extra_stuff_amount: Cost of anything else
        exempt_member_ids: Members who brought their own food
        owing_member_ids: Members who did not bring food. Defaults to
            every active member of the company not in
            ``exempt_member_ids``.
        extras: Guests hosted by members of either set

    Returns:
        Tuple of (created FoodSummary, LedgerSnapshot after settlement)

    Raises:
        CompanyNotFoundError: If company doesn't exist
        InvalidInputError: If the participant sets are malformed
        InvalidAmountError: If an amount is invalid or breads > total
        LedgerApplyError: If the balances could not be updated; the
            summary is not saved either
    """
    for name, value in (
        ('curries_amount', curries_amount),
        ('extra_stuff_amount', extra_stuff_amount),
    ):
        require_amount(value, field=name)

    extras = list(extras)
    exempt, owing, batch = _prepare_settlement(
        company_id=company_id,
        total_amount=total_amount,
        breads_amount=breads_amount,
        exempt_member_ids=exempt_member_ids,
        owing_member_ids=owing_member_ids,
        extras=extras,
    )

    with transaction.atomic():
        summary = FoodSummary.objects.create(
            company_id=company_id,
            date=date,
            total_breads_amount=breads_amount,
            total_curries_amount=curries_amount,
            extra_stuff_amount=extra_stuff_amount,
            total_amount=total_amount,
        )
        summary.members_brought_food.set(exempt)
        summary.members_didnt_bring_food.set(owing)
        ExtraMember.objects.bulk_create([
            ExtraMember(
                food_summary=summary,
                member_related_to_id=extra.member_id,
                no_of_people=extra.headcount,
            )
            for extra in extras
        ])

        snapshot = apply_batch(batch)

    logger.info(
        "Settled food summary %s for company %s across %d member(s)",
        summary.id,
        company_id,
        len(batch.member_deltas),
    )
    return summary, snapshot


def reverse_food_summary(*, summary_id: UUID) -> LedgerSnapshot:
    """
    Delete a food summary and undo its settlement.

    The summary row is locked, its reversal is computed from the stored
    fields, then the summary and its extra rows are deleted and the
    inverse batch is applied, all in one transaction.

    Returns:
        LedgerSnapshot after the reversal

    Raises:
        SummaryNotFoundError: If the summary doesn't exist (or was
            reversed concurrently)
        InvalidInputError, InvalidAmountError: If the stored summary no
            longer describes a valid settlement
        LedgerApplyError: If the balances could not be updated; the
            summary is kept in that case
    """
    with transaction.atomic():
        try:
            summary = FoodSummary.objects.select_for_update().get(id=summary_id)
        except FoodSummary.DoesNotExist:
            raise SummaryNotFoundError(f"Food summary with ID {summary_id} not found")

        try:
            batch = compute_reversal(summary)
        except (InvalidInputError, InvalidAmountError):
            logger.warning("Food summary %s cannot be reversed from its stored fields", summary_id)
            raise

        summary.extra_members.all().delete()
        summary.delete()

        snapshot = apply_batch(batch)

    logger.info("Reversed food summary %s for company %s", summary_id, batch.company_id)
    return snapshot


def list_food_summaries(
    *,
    owner,
    company_id: Optional[UUID] = None,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None
) -> QuerySet[FoodSummary]:
    """
    Food summaries of the companies ``owner`` owns, latest lunch first.

    Args:
        owner: User owning the companies
        company_id: Only this company (optional)
        date_from: Lunches on or after this date (optional)
        date_to: Lunches on or before this date (optional)
    """
    queryset = FoodSummary.objects.filter(company__owner=owner).select_related('company')

    if company_id:
        queryset = queryset.filter(company_id=company_id)
    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)

    return queryset.order_by('-date', '-created_at')
