"""Error types raised at the store, insight and submission boundaries."""

from __future__ import annotations


class StoreUnavailable(Exception):
    """The log store could not be read or written."""


class GenerationError(Exception):
    """Insight generation failed; the message is safe to show to users."""


class ValidationError(ValueError):
    """A daily log submission is missing required fields."""
