"""Errors raised by the food resolution engine and its callers."""


class ProteinTrackerError(Exception):
    """Base class for application errors."""


class SourceUnavailableError(ProteinTrackerError):
    """A remote nutrition source failed or answered with a non-success status."""


class ClassifierUnavailableError(ProteinTrackerError):
    """The image classifier could not be loaded or could not classify."""


class InvalidServingSizeError(ProteinTrackerError, ValueError):
    """A serving size was zero or negative."""


class InvalidGoalError(ProteinTrackerError, ValueError):
    """A daily protein goal was zero or negative."""
