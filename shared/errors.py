"""
errors.py – the two failure kinds the counter service knows about
"""

from __future__ import annotations


class CounterError(Exception):
    """Base class for trade-counter errors."""


class StoreUnavailable(CounterError):
    """Redis could not be reached (connect failure / socket timeout)."""


class RateLimited(CounterError):
    """Caller exceeded the request cap; not a system fault."""

    def __init__(self, message: str, retry_after: float = 0.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after
