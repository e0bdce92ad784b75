"""
Companies app services layer.

Services contain business logic and orchestrate operations across models.
All balance-changing operations go through apps.ledger.
"""

from .exceptions import (
    CompaniesServiceError,
    CompanyNotFoundError,
    InsufficientPermissionsError,
)

from .company_management import (
    create_company,
    update_company,
    get_company_for_owner,
    list_companies,
)

from .topup_management import (
    record_topup,
    list_topups,
)


__all__ = [
    # Exceptions
    'CompaniesServiceError',
    'CompanyNotFoundError',
    'InsufficientPermissionsError',

    # Company Management
    'create_company',
    'update_company',
    'get_company_for_owner',
    'list_companies',

    # Topups
    'record_topup',
    'list_topups',
]
