"""Domain error types (see :mod:`core.exceptions.errors`)."""

from core.exceptions.errors import (
    DuplicateCommissionerForSectionError,
    DuplicateUsernameError,
    InvalidTransitionError,
    RecordNotFoundError,
    ReportAlreadyApprovedError,
    ScoutsError,
    UnauthorizedError,
    ValidationFailedError,
)

__all__ = [
    "ScoutsError",
    "DuplicateUsernameError",
    "DuplicateCommissionerForSectionError",
    "RecordNotFoundError",
    "ValidationFailedError",
    "InvalidTransitionError",
    "ReportAlreadyApprovedError",
    "UnauthorizedError",
]
