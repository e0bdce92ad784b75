"""
Domain-specific exceptions for food_summaries app.

Exception Hierarchy:
    FoodSummariesServiceError (base)
    ├── InvalidInputError
    └── SummaryNotFoundError

Amount problems raise apps.ledger.exceptions.InvalidAmountError and
write failures raise apps.ledger.exceptions.LedgerApplyError.
"""


class FoodSummariesServiceError(Exception):
    """Base exception for all food summary service errors."""
    pass


class InvalidInputError(FoodSummariesServiceError):
    """
    Raised when the participant sets of a food summary are malformed.

    Examples: nobody to bill, a member both brought and did not bring
    food, a guest entry pointing at a member outside the lunch, a
    guest count below one.
    """
    pass


class SummaryNotFoundError(FoodSummariesServiceError):
    """Raised when a food summary does not exist (e.g. already reversed)."""
    pass
