"""
Domain-specific exceptions for companies app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class CompaniesServiceError(Exception):
    """Base exception for all companies service errors."""
    pass


class CompanyNotFoundError(CompaniesServiceError):
    """Raised when a company does not exist or is inaccessible."""
    pass


class InsufficientPermissionsError(CompaniesServiceError):
    """Raised when a user does not own the company they act on."""
    pass
