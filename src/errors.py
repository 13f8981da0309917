"""Domain exceptions for the benefits screener.

Raised where the problem is detected; the web layer translates them into
responses. None of them is fatal: every one leaves a recoverable state.
"""

from __future__ import annotations


class ScreenerError(Exception):
    """Base class for all screener errors."""


class DataLoadError(ScreenerError):
    """The benefits data source is unreachable or malformed."""

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source = source


class StepValidationError(ScreenerError):
    """A required selection is missing on the active questionnaire step."""

    def __init__(self, message: str, step: int) -> None:
        super().__init__(message)
        self.step = step


class InvalidSelectionError(ScreenerError, ValueError):
    """An answer names an unknown field or an option the step does not offer."""


class InvalidTransitionError(ScreenerError):
    """The requested transition is not allowed from the current state."""
