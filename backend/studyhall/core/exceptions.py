"""
Application exceptions.

Raised by the scheduling core and the service layer, rendered to JSON by the
handlers in `studyhall.core.error_handlers`. None of them is fatal: each one
rejects a single operation before anything is written.
"""

from typing import Any, Optional


class BaseAppException(Exception):
    """Base class for errors that map onto an HTTP response."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """A booking, member or quote input breaks a scheduling rule."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        details = dict(details or {})
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, 400, "VALIDATION_ERROR", details)


class ConflictError(BaseAppException):
    """The seat is already taken for part of the requested schedule."""

    def __init__(self, seat_number: int, conflicts: list):
        self.conflicts = conflicts
        message = f"Seat {seat_number} is already booked for an overlapping schedule"
        details = {
            "seat_number": seat_number,
            "conflicts": [
                {
                    "id": b.id,
                    "member_name": b.member_name,
                    "start_date": b.start_date.isoformat(),
                    "end_date": b.end_date.isoformat(),
                    "start_time": b.start_time.strftime("%H:%M"),
                    "end_time": b.end_time.strftime("%H:%M"),
                    "days_of_week": sorted(b.days_of_week),
                }
                for b in conflicts
            ],
        }
        super().__init__(message, 409, "BOOKING_CONFLICT", details)


class NotFoundError(BaseAppException):
    def __init__(self, resource: str, identifier: Optional[str] = None):
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
            details = {"resource": resource, "identifier": identifier}
        else:
            message = f"{resource} not found"
            details = {"resource": resource}
        super().__init__(message, 404, "NOT_FOUND", details)
