"""
Domain exceptions for the ledger.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── InvalidAmountError
    └── LedgerApplyError
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger errors."""
    pass


class InvalidAmountError(LedgerServiceError):
    """
    Raised when an amount is not usable for a balance mutation.

    Covers negative amounts, non-integer amounts, zero where a positive
    amount is required and a bread cost larger than the total amount.
    """
    pass


class LedgerApplyError(LedgerServiceError):
    """
    Raised when a batch of balance deltas could not be committed.

    Nothing from the batch is persisted when this is raised. The
    operation is safe to retry by the caller; the ledger never retries
    on its own because balance mutations are not idempotent.
    """
    pass
