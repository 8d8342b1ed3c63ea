"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout the identity
validator. Using specific exceptions allows callers to tell a missing
template apart from a broken template or unusable input.

Exception Hierarchy:
    IdentityValidatorError (base)
    ├── TemplateError
    │   ├── TemplateNotFoundError
    │   ├── TemplateNotLoadedError
    │   └── MalformedTemplateError
    ├── ExtractionError
    │   └── MalformedInputError
    ├── ConfigurationError
    └── OutputError
        ├── JsonExportError
        └── ExcelExportError
"""


class IdentityValidatorError(Exception):
    """
    Base exception for all identity validator errors.

    All custom exceptions in this system inherit from this class,
    allowing for easy catching of all system-specific errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# TEMPLATE ERRORS
# =============================================================================

class TemplateError(IdentityValidatorError):
    """Base exception for template handling errors."""
    pass


class TemplateNotFoundError(TemplateError):
    """
    Raised when a template identifier has no backing definition.

    Example:
        >>> raise TemplateNotFoundError("XX.id", "templates/XX/id.yaml")
    """

    def __init__(self, identifier: str, path: str = None):
        message = f"Template not found: '{identifier}'"
        details = {"identifier": identifier, "path": path}
        super().__init__(message, details)


class TemplateNotLoadedError(TemplateError):
    """
    Raised when an operation needs a loaded template or an
    extracted document that does not exist yet.
    """

    def __init__(self, operation: str, reason: str = None):
        message = f"Cannot run '{operation}': {reason or 'no template loaded'}"
        details = {"operation": operation, "reason": reason}
        super().__init__(message, details)


class MalformedTemplateError(TemplateError):
    """Raised when a template definition or one of its fields is unusable."""

    def __init__(self, reason: str, template: str = None, field: str = None):
        message = f"Malformed template: {reason}"
        details = {"template": template, "field": field}
        super().__init__(message, details)


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================

class ExtractionError(IdentityValidatorError):
    """Base exception for field extraction errors."""
    pass


class MalformedInputError(ExtractionError):
    """Raised when the input line cannot be decomposed by the template."""

    def __init__(self, field: str, reason: str = None, position: int = None):
        message = f"Malformed input at field '{field}'"
        details = {"field": field, "reason": reason, "position": position}
        super().__init__(message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(IdentityValidatorError):
    """Raised when a configuration value is missing or invalid."""

    def __init__(self, key: str, reason: str = None):
        message = f"Invalid configuration for '{key}'"
        details = {"key": key, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(IdentityValidatorError):
    """Base exception for output handling errors."""
    pass


class JsonExportError(OutputError):
    """Raised when writing a JSON report fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export JSON file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# Export all exceptions
__all__ = [
    'IdentityValidatorError',
    'TemplateError',
    'TemplateNotFoundError',
    'TemplateNotLoadedError',
    'MalformedTemplateError',
    'ExtractionError',
    'MalformedInputError',
    'ConfigurationError',
    'OutputError',
    'JsonExportError',
    'ExcelExportError',
]
