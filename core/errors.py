# core/errors.py

from __future__ import annotations

from typing import Optional


class TripFormError(Exception):
    """Base class for every failure the page turns into a notice."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(TripFormError):
    """
    One of the submit-time rules failed.
    rule is one of: "required", "cost", "restaurant", "past_date".
    """

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule


class TransportFailure(TripFormError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyExportFailure(TripFormError):
    def __init__(self, message: str = "There are no registered trips to export."):
        super().__init__(message)
