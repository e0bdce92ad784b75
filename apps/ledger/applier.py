"""
Ledger applier.

Applies a bundle of balance deltas (one company, any number of members)
as a single logical unit:

    batch = LedgerBatch(
        company_id=company.id,
        company_delta=-500,
        member_deltas={alice.id: -500, bob.id: -500},
    )
    snapshot = apply_batch(batch)
    snapshot.company_balance       # balance after the batch
    snapshot.member_balances       # {member_id: balance}

Every balance write is an atomic ``F('balance') + delta`` increment, and
all writes of a batch share one transaction, so two concurrent batches
touching the same rows never lose an update. Applying a batch is not
idempotent: applying it twice moves the balances twice.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from uuid import UUID

from django.db import transaction, DatabaseError
from django.db.models import F
from django.utils import timezone

from apps.companies.models import Company
from apps.members.models import Member

from .exceptions import LedgerApplyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerBatch:
    """
    Balance deltas to apply together.

    ``company_id`` may be None for member-only batches (cash deposits);
    in that case ``company_delta`` must be 0.
    """
    company_id: Optional[UUID]
    company_delta: int = 0
    member_deltas: Mapping[UUID, int] = field(default_factory=dict)

    def __post_init__(self):
        if self.company_id is None and self.company_delta:
            raise ValueError("company_delta requires a company_id")

    def inverted(self) -> 'LedgerBatch':
        """Return the batch that exactly undoes this one."""
        return LedgerBatch(
            company_id=self.company_id,
            company_delta=-self.company_delta,
            member_deltas={
                member_id: -delta
                for member_id, delta in self.member_deltas.items()
            },
        )

    @property
    def total_delta(self) -> int:
        """Sum of the company delta and every member delta."""
        return self.company_delta + sum(self.member_deltas.values())


@dataclass(frozen=True)
class LedgerSnapshot:
    """Balances read back inside the transaction that applied a batch."""
    company_balance: Optional[int]
    member_balances: Dict[UUID, int] = field(default_factory=dict)


def apply_batch(batch: LedgerBatch) -> LedgerSnapshot:
    """
    Apply a LedgerBatch atomically and return the resulting balances.

    When called inside an outer ``transaction.atomic()`` block, the batch
    joins that transaction, so the caller's own writes (creating or
    deleting a food summary, recording a deposit) commit or roll back
    together with the balances.

    Args:
        batch: The deltas to apply. When ``batch.company_id`` is set,
            every member must belong to that company.

    Returns:
        LedgerSnapshot with the post-update balances.

    Raises:
        LedgerApplyError: If the company or a member row is missing, or
            the database rejects any write. No delta of the batch is
            committed in that case.
    """
    try:
        with transaction.atomic():
            now = timezone.now()

            if batch.company_id is not None:
                updated = Company.objects.filter(id=batch.company_id).update(
                    balance=F('balance') + batch.company_delta,
                    updated_at=now,
                )
                if updated != 1:
                    raise LedgerApplyError("Company not found while applying ledger batch")

            members = Member.objects.all()
            if batch.company_id is not None:
                members = members.filter(company_id=batch.company_id)

            # Fixed update order keeps row locks ordered across concurrent batches.
            for member_id in sorted(batch.member_deltas, key=str):
                updated = members.filter(id=member_id).update(
                    balance=F('balance') + batch.member_deltas[member_id],
                    updated_at=now,
                )
                if updated != 1:
                    raise LedgerApplyError("Member not found while applying ledger batch")

            company_balance = None
            if batch.company_id is not None:
                company_balance = (
                    Company.objects
                    .values_list('balance', flat=True)
                    .get(id=batch.company_id)
                )
            member_balances = dict(
                Member.objects
                .filter(id__in=list(batch.member_deltas))
                .values_list('id', 'balance')
            )
    except DatabaseError as exc:
        logger.error("Ledger batch for company %s failed: %s", batch.company_id, exc)
        raise LedgerApplyError("Balance update failed, please retry") from exc
    except LedgerApplyError:
        logger.warning("Ledger batch for company %s rolled back", batch.company_id)
        raise

    logger.info(
        "Applied ledger batch: company=%s company_delta=%s members=%d",
        batch.company_id,
        batch.company_delta,
        len(batch.member_deltas),
    )
    return LedgerSnapshot(company_balance=company_balance, member_balances=member_balances)
