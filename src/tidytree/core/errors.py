"""Exceptions raised by the analysis engine."""

from __future__ import annotations


class TidyError(Exception):
    """Base class for engine errors."""


class RootUnavailableError(TidyError):
    """The scan root is missing or is not a directory."""


class ScanCancelled(TidyError):
    """A pass was stopped through its cancel token."""
