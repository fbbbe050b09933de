# jsonshop/errors.py
"""Errors raised by the managers.

The HTTP layer catches these and turns them into status codes.
"""


class StoreError(Exception):
    """Base class for every manager-level failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(StoreError):
    """Missing required fields, a duplicate product code or a bad quantity."""


class NotFound(StoreError):
    """Unknown product or cart id."""
