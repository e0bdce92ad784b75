"""
Members app services layer.

Services contain business logic and orchestrate operations across models.
All balance-changing operations go through apps.ledger.
"""

from .exceptions import (
    MembersServiceError,
    MemberNotFoundError,
)

from .member_management import (
    create_member,
    update_member,
    deactivate_member,
    list_members,
)

from .deposit_management import (
    record_cash_deposit,
    list_cash_deposits,
)


__all__ = [
    # Exceptions
    'MembersServiceError',
    'MemberNotFoundError',

    # Member Management
    'create_member',
    'update_member',
    'deactivate_member',
    'list_members',

    # Cash Deposits
    'record_cash_deposit',
    'list_cash_deposits',
]
