"""Errors raised by bid recorder backends."""

from __future__ import annotations


class SubmissionError(RuntimeError):
    """Raised when the external bid recorder did not confirm the write."""
