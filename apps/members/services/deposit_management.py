"""
Cash deposit service.

A cash deposit is a plain credit to one member's balance. The
CashDeposit row and the balance increment are written in one
transaction.
"""

import logging
from datetime import date as date_type
from typing import Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.ledger.applier import LedgerBatch, apply_batch
from apps.ledger.money import require_amount
from apps.members.models import Member, CashDeposit

from .exceptions import MemberNotFoundError

logger = logging.getLogger(__name__)


def record_cash_deposit(
    *,
    member_id: UUID,
    amount: int,
    date: date_type
) -> Tuple[CashDeposit, int]:
    """
    Credit ``amount`` to the member balance and record the deposit.

    Deposits are accepted for inactive members too, so they can settle
    what they still owe.

    Args:
        member_id: UUID of the member
        amount: Positive amount in minor units
        date: Date the cash was handed in

    Returns:
        Tuple of (created CashDeposit, member balance after the credit)

    Raises:
        InvalidAmountError: If amount is not a positive integer
        MemberNotFoundError: If member doesn't exist
        LedgerApplyError: If the balance update could not be committed
    """
    require_amount(amount, allow_zero=False)

    with transaction.atomic():
        if not Member.objects.filter(id=member_id).exists():
            raise MemberNotFoundError(f"Member with ID {member_id} not found")

        deposit = CashDeposit.objects.create(
            member_id=member_id,
            amount=amount,
            date=date,
        )
        snapshot = apply_batch(LedgerBatch(company_id=None, member_deltas={member_id: amount}))

        Member.objects.filter(id=member_id).filter(
            Q(last_cash_deposit__isnull=True) | Q(last_cash_deposit__lt=date)
        ).update(last_cash_deposit=date)

    logger.info("Recorded cash deposit %s for member %s", deposit.id, member_id)
    return deposit, snapshot.member_balances[member_id]


def list_cash_deposits(*, member_id: UUID) -> QuerySet[CashDeposit]:
    """Cash deposits of a member, newest first."""
    return CashDeposit.objects.filter(member_id=member_id).order_by('-date', '-created_at')
