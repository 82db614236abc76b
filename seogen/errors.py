"""Exception types raised across the generation and publishing pipeline."""

from typing import Optional


class SeogenError(Exception):
    """Base class for all seogen errors"""


class ValidationError(SeogenError):
    """Required input is missing; raised before any external call."""


class ProviderError(SeogenError):
    """Completion call failed or returned no usable text."""


class GenerationError(SeogenError):
    """A generation run aborted. The original cause is chained, not exposed."""

    def __init__(self, message: str = "Failed to generate content", tag: Optional[str] = None):
        super().__init__(message)
        self.tag = tag


class PublicationError(SeogenError):
    """WordPress REST call failed."""


class AuditLogError(SeogenError):
    """Spreadsheet append failed. Logged only, never surfaced to the caller."""
