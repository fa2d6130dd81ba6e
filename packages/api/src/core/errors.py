# This project was developed with assistance from AI tools.
"""Domain exceptions raised by the completeness, override and submission services."""


class CompletenessError(Exception):
    """Base class for completeness engine failures."""


class ConfigurationError(CompletenessError):
    """Raised when an application carries an unrecognized transaction type."""


class ValidationError(CompletenessError, ValueError):
    """Raised when caller-supplied input is rejected (e.g. a blank override reason)."""


class ApplicationNotFoundError(CompletenessError, LookupError):
    """Raised when no application exists for the given id."""


class ApplicationIncompleteError(CompletenessError):
    """Raised when submission is attempted before every required section is satisfied."""

    def __init__(self, message: str, missing_sections: list[str]):
        super().__init__(message)
        self.missing_sections = missing_sections


class AlreadySubmittedError(CompletenessError):
    """Raised when an application has already been submitted for review."""


class InvalidTransitionError(CompletenessError, ValueError):
    """Raised when an application status transition is not allowed."""
