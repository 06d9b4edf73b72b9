class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when the face comparator cannot be used at all (e.g. missing API key)."""


class ComparisonError(DomainError):
    """Raised when a single face comparison call fails or returns garbage."""


class ReferenceImageError(DomainError):
    """Raised when a stored reference face image cannot be resolved."""


class StorageError(DomainError):
    """Raised when a repository read or write fails."""


class DuplicateAttendanceError(StorageError):
    """Raised when a present record already exists for the identity and day."""
