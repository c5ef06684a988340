"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
CLASS_NOT_FOUND = "CLASS_NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNKNOWN_BELT = "UNKNOWN_BELT"
INVALID_RANK = "INVALID_RANK"
NO_CHANGE = "NO_CHANGE"
INCOMPARABLE_RANK = "INCOMPARABLE_RANK"
NOT_SCHEDULED = "NOT_SCHEDULED"
FORBIDDEN = "FORBIDDEN"
UNAUTHORIZED = "UNAUTHORIZED"
PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    code = VALIDATION_ERROR


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    code = NOT_FOUND


class ClassNotFoundError(NotFoundError):
    """Raised when a class definition does not exist."""

    code = CLASS_NOT_FOUND


class DuplicateResourceError(DomainError):
    """Raised when attempting to create a resource that would violate a uniqueness constraint."""

    code = DUPLICATE_RESOURCE


class AlreadyCheckedInError(DuplicateResourceError):
    """Raised when a member already has an attendance record for the class and date."""

    code = ALREADY_CHECKED_IN


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail."""

    code = VALIDATION_ERROR


class UnknownBeltError(DomainValidationError):
    """Raised when a belt is not part of the program's taxonomy."""

    code = UNKNOWN_BELT


class InvalidRankError(DomainValidationError):
    """Raised when a belt/stripe combination is not valid for a program."""

    code = INVALID_RANK


class NoChangeError(DomainValidationError):
    """Raised when a promotion would leave the rank exactly as it is."""

    code = NO_CHANGE


class IncomparableRankError(DomainValidationError):
    """Raised when ranks from different programs are compared."""

    code = INCOMPARABLE_RANK


class DemotionNotAllowedError(DomainValidationError):
    """Raised when demotions are disabled and a grading is not an advancement."""


class NotScheduledError(DomainValidationError):
    """Raised when a new check-in targets a date the class does not run on."""

    code = NOT_SCHEDULED


class ForbiddenError(DomainError):
    """Raised when the caller is authenticated but not allowed to act."""

    code = FORBIDDEN


class UnauthorizedError(ForbiddenError):
    """Raised when a grader holds no grading capability for a class."""

    code = UNAUTHORIZED


class PersistenceFailureError(DomainError):
    """Raised when the underlying store fails to complete a write."""

    code = PERSISTENCE_FAILURE
