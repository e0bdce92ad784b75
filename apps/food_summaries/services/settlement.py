"""
Settlement and reversal of food summaries.

Settlement converts a lunch into ledger deltas:

    company_delta      = -breads_amount
    remainder          = total_amount - breads_amount
    member_delta[m]    = -round(remainder * weight[m] / total_weight)

Each member's share is rounded half away from zero on its own, without
redistributing the rounding remainder, so the member deltas may differ
from ``remainder`` by up to one unit per participant. Reversal re-runs
the same computation on the stored summary and negates it, which makes
it the exact inverse of the original settlement.
"""

from uuid import UUID

from apps.ledger.applier import LedgerBatch
from apps.ledger.exceptions import InvalidAmountError
from apps.ledger.money import require_amount, weighted_share

from .participants import ExtraHeadcount, ParticipantWeights, resolve_participants


def compute_settlement(
    *,
    company_id: UUID,
    total_amount: int,
    breads_amount: int,
    participants: ParticipantWeights
) -> LedgerBatch:
    """
    Compute the deltas a food summary applies to the ledger.

    Pure function; nothing is read from or written to the database.

    Raises:
        InvalidAmountError: If an amount is negative or not an integer,
            the bread cost exceeds the total, or a weight is not positive
    """
    require_amount(total_amount, field='total_amount')
    require_amount(breads_amount, field='breads_amount')

    remainder = total_amount - breads_amount
    if remainder < 0:
        raise InvalidAmountError("Breads amount cannot exceed the total amount")

    if any(weight <= 0 for weight in participants.weights.values()):
        raise InvalidAmountError("Participant weights must be positive")

    total_weight = participants.total_weight
    if total_weight <= 0:
        raise InvalidAmountError("There is nobody to split the food cost between")

    member_deltas = {
        member_id: -weighted_share(remainder, weight, total_weight)
        for member_id, weight in participants.weights.items()
    }

    return LedgerBatch(
        company_id=company_id,
        company_delta=-breads_amount,
        member_deltas=member_deltas,
    )


def weights_for_summary(summary) -> ParticipantWeights:
    """
    Re-derive participant weights from a stored FoodSummary.

    Only the summary's own relation sets and extra rows are used, never
    the members' current active flags.
    """
    owing = set(summary.members_didnt_bring_food.values_list('id', flat=True))
    exempt = set(summary.members_brought_food.values_list('id', flat=True))
    extras = [
        ExtraHeadcount(member_id=member_id, headcount=headcount)
        for member_id, headcount in summary.extra_members.values_list(
            'member_related_to_id', 'no_of_people'
        )
    ]
    return resolve_participants(
        members=owing | exempt,
        exempt=exempt,
        owing=owing,
        extras=extras,
    )


def compute_reversal(summary) -> LedgerBatch:
    """
    Compute the deltas that undo a stored FoodSummary's settlement.

    Returns:
        LedgerBatch with ``company_delta = +breads`` and every member
        delta equal in magnitude to the one applied at settlement.
    """
    settlement = compute_settlement(
        company_id=summary.company_id,
        total_amount=summary.total_amount,
        breads_amount=summary.total_breads_amount,
        participants=weights_for_summary(summary),
    )
    return settlement.inverted()
