class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class StaleUpdateError(DomainError):
    """Raised when a presence update falls outside the staleness window."""


class PreconditionError(DomainError):
    """Raised when a required record is missing for a state transition."""


class ExternalServiceError(DomainError):
    """Raised when a downstream collaborator (AI provider, renderer) fails."""


class ExternalTimeoutError(ExternalServiceError):
    """Raised when a downstream collaborator does not answer in time."""
