"""Domain-specific exceptions for the expense tracker core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""


class PersistenceError(IOError):
    """Raised when the backing file cannot be read, parsed, or written."""


class ExportError(IOError):
    """Raised when an export destination cannot be created or written."""
