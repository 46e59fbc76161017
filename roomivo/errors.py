"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
MISSING_CREDENTIALS = "MISSING_CREDENTIALS"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when creating a resource would violate a uniqueness rule (e.g. a registered email)."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. an invalid status transition)."""

    pass


class MissingCredentialsError(DomainValidationError):
    """Raised when email or password is absent from a register/login request."""

    pass


class UnauthorizedError(DomainError):
    """Raised when credentials are missing or do not match."""

    pass


class ForbiddenError(DomainError):
    """Raised when the caller's token is invalid or the caller does not own the resource."""

    pass


class ExternalServiceError(DomainError):
    """Raised when a third-party provider (image CDN) fails."""

    pass
