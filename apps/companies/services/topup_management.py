"""
Topup service.

A topup is a plain credit to the company balance. The Topup row and the
balance increment are written in one transaction.
"""

import logging
from datetime import date as date_type
from typing import Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.companies.models import Company, Topup
from apps.ledger.applier import LedgerBatch, apply_batch
from apps.ledger.money import require_amount

from .exceptions import CompanyNotFoundError

logger = logging.getLogger(__name__)


def record_topup(
    *,
    company_id: UUID,
    amount: int,
    date: date_type,
    performed_by: str
) -> Tuple[Topup, int]:
    """
    Credit ``amount`` to the company balance and record the topup.

    ``last_topup`` only moves forward: recording an older topup keeps
    the newer date.

    Args:
        company_id: UUID of the company
        amount: Positive amount in minor units
        date: Date the money was handed over
        performed_by: Who topped up (free text, as entered)

    Returns:
        Tuple of (created Topup, company balance after the credit)

    Raises:
        InvalidAmountError: If amount is not a positive integer
        CompanyNotFoundError: If company doesn't exist
        LedgerApplyError: If the balance update could not be committed
    """
    require_amount(amount, allow_zero=False)

    with transaction.atomic():
        if not Company.objects.filter(id=company_id).exists():
            raise CompanyNotFoundError(f"Company with ID {company_id} not found")

        topup = Topup.objects.create(
            company_id=company_id,
            amount=amount,
            date=date,
            performed_by=performed_by,
        )
        snapshot = apply_batch(LedgerBatch(company_id=company_id, company_delta=amount))

        Company.objects.filter(id=company_id).filter(
            Q(last_topup__isnull=True) | Q(last_topup__lt=date)
        ).update(last_topup=date)

    logger.info("Recorded topup %s for company %s", topup.id, company_id)
    return topup, snapshot.company_balance


def list_topups(*, company_id: UUID) -> QuerySet[Topup]:
    """Topups of a company, newest first."""
    return Topup.objects.filter(company_id=company_id).order_by('-date', '-created_at')
