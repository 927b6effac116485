"""Error taxonomy for aws-logs-tui.

Collaborator errors are not reinterpreted; they are re-raised under one of
these kinds with the original exception kept as ``__cause__``.
"""

from __future__ import annotations

from typing import Optional


class AwsLogsTuiError(RuntimeError):
    """Base class for errors surfaced at the process boundary."""


class ConfigurationError(AwsLogsTuiError):
    """Raised when the AWS profile/region/credentials cannot be resolved."""


class RetrievalError(AwsLogsTuiError):
    """Raised when a ``ListFunctions`` page request fails."""

    def __init__(self, message: str, *, page_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_number = page_number


class InputError(AwsLogsTuiError):
    """Raised for malformed terminal input; the event loop drops it."""
