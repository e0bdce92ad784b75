"""
Ledger - balance primitives shared by the companies, members and
food_summaries apps.

Company and member balances are plain integer columns (minor currency
units). They are only ever changed through ``apply_batch``, which turns a
``LedgerBatch`` of deltas into atomic ``F('balance') + delta`` updates
inside a single transaction.

Modules:
- money: integer-safe rounding and division helpers
- applier: LedgerBatch, LedgerSnapshot, apply_batch
- exceptions: LedgerServiceError hierarchy
"""
