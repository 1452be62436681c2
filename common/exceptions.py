"""Domain-specific exceptions for the expense tracker core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class UnknownCategoryError(LookupError):
    """Raised when an operation references a category that is not registered."""


class DuplicateCategoryError(ValueError):
    """Raised when registering a category name that already exists."""


class ExportIOError(IOError):
    """Raised when the spreadsheet writer cannot produce the export file."""
