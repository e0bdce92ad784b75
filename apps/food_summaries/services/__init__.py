"""
Food summaries app services layer.

- participants: billing weights from who brought food and who hosted guests
- settlement: pure settlement / reversal deltas
- food_summary_management: settle / reverse with the ledger, queries
"""

from apps.ledger.exceptions import InvalidAmountError, LedgerApplyError

from .exceptions import (
    FoodSummariesServiceError,
    InvalidInputError,
    SummaryNotFoundError,
)

from .participants import (
    ExtraHeadcount,
    ParticipantWeights,
    resolve_participants,
)

from .settlement import (
    compute_settlement,
    compute_reversal,
    weights_for_summary,
)

from .food_summary_management import (
    preview_settlement,
    settle_food_summary,
    reverse_food_summary,
    list_food_summaries,
)


__all__ = [
    # Exceptions
    'FoodSummariesServiceError',
    'InvalidInputError',
    'SummaryNotFoundError',
    'InvalidAmountError',
    'LedgerApplyError',

    # Participants
    'ExtraHeadcount',
    'ParticipantWeights',
    'resolve_participants',

    # Settlement
    'compute_settlement',
    'compute_reversal',
    'weights_for_summary',

    # Food Summary Management
    'preview_settlement',
    'settle_food_summary',
    'reverse_food_summary',
    'list_food_summaries',
]
