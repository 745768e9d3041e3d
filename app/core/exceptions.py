"""
Domain errors for the study-hall owner backend.

Services raise these; the API layer maps them to an ErrorResponse through a
single exception handler registered in app.main.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional

from fastapi import status


class ErrorCode(str, Enum):
    # Input / validation
    INVALID_TIME_FORMAT = "INVALID_TIME_FORMAT"
    OPEN_NOT_BEFORE_CLOSE = "OPEN_NOT_BEFORE_CLOSE"
    INVALID_SHIFT_RANGE = "INVALID_SHIFT_RANGE"
    SHIFT_OUTSIDE_OPERATING_HOURS = "SHIFT_OUTSIDE_OPERATING_HOURS"
    SHIFT_OVERLAP = "SHIFT_OVERLAP"
    EMPTY_CONFIGURATION = "EMPTY_CONFIGURATION"
    INVALID_WEEKDAY = "INVALID_WEEKDAY"
    INVALID_DAY_HOURS = "INVALID_DAY_HOURS"
    EMPTY_SEAT_LIST = "EMPTY_SEAT_LIST"
    DUPLICATE_SEAT_NUMBER = "DUPLICATE_SEAT_NUMBER"
    INVALID_SEAT_SPEC = "INVALID_SEAT_SPEC"
    MISSING_MAINTENANCE_REASON = "MISSING_MAINTENANCE_REASON"
    INVALID_MAINTENANCE_REASON = "INVALID_MAINTENANCE_REASON"
    EMPTY_SEAT_SELECTION = "EMPTY_SEAT_SELECTION"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    UNSUPPORTED_REPORT_FORMAT = "UNSUPPORTED_REPORT_FORMAT"
    INVALID_DATA = "INVALID_DATA"

    # Not found / authorization
    HALL_NOT_FOUND = "HALL_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    SOME_SEATS_NOT_FOUND = "SOME_SEATS_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"


class DomainError(Exception):
    """Base error with a machine-readable code and a user-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidRequestError(DomainError):
    """Raised when caller-supplied data breaks a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You don't have access to this hall") -> None:
        super().__init__(ErrorCode.FORBIDDEN, message)


# ---------------------------------------------------------------------------
# Shift configuration
# ---------------------------------------------------------------------------


class InvalidTimeFormatError(InvalidRequestError):
    def __init__(self, field: str, day: str) -> None:
        super().__init__(
            ErrorCode.INVALID_TIME_FORMAT,
            f"{field} for {day} must be in HH:mm format",
            {"day": day, "field": field},
        )


class OpenNotBeforeCloseError(InvalidRequestError):
    def __init__(self, day: str) -> None:
        super().__init__(
            ErrorCode.OPEN_NOT_BEFORE_CLOSE,
            f"Opening time must be before closing time for {day}",
            {"day": day},
        )


class InvalidShiftRangeError(InvalidRequestError):
    def __init__(self, day: str, shift_name: str) -> None:
        super().__init__(
            ErrorCode.INVALID_SHIFT_RANGE,
            f"Shift start time must be before end time for {day} - {shift_name}",
            {"day": day, "shift": shift_name},
        )


class ShiftOutsideOperatingHoursError(InvalidRequestError):
    def __init__(self, day: str, shift_name: str) -> None:
        super().__init__(
            ErrorCode.SHIFT_OUTSIDE_OPERATING_HOURS,
            f"Shift times must be within opening hours for {day} - {shift_name}",
            {"day": day, "shift": shift_name},
        )


class ShiftOverlapError(InvalidRequestError):
    def __init__(self, day: str, first: str, second: str) -> None:
        super().__init__(
            ErrorCode.SHIFT_OVERLAP,
            f"Shifts overlap for {day}: {first} and {second}",
            {"day": day, "shifts": [first, second]},
        )


class EmptyConfigurationError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EMPTY_CONFIGURATION, "Opening hours cannot be empty")


class InvalidWeekdayError(InvalidRequestError):
    def __init__(self, day: str) -> None:
        super().__init__(
            ErrorCode.INVALID_WEEKDAY,
            f"Unknown day of week: {day}",
            {"day": day},
        )


class MalformedDayHoursError(InvalidRequestError):
    def __init__(self, day: str) -> None:
        super().__init__(
            ErrorCode.INVALID_DAY_HOURS,
            f"Opening hours for {day} are malformed",
            {"day": day},
        )


# ---------------------------------------------------------------------------
# Seat layout / status
# ---------------------------------------------------------------------------


class EmptySeatListError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EMPTY_SEAT_LIST, "Seat list cannot be empty")


class DuplicateSeatNumberError(InvalidRequestError):
    def __init__(self, duplicates: Iterable[str]) -> None:
        duplicates = sorted(set(duplicates))
        super().__init__(
            ErrorCode.DUPLICATE_SEAT_NUMBER,
            "Duplicate seat numbers found: " + ", ".join(duplicates),
            {"duplicates": duplicates},
        )
        self.duplicates = duplicates


class InvalidSeatSpecError(InvalidRequestError):
    def __init__(self, seat_number: str, reason: str) -> None:
        super().__init__(
            ErrorCode.INVALID_SEAT_SPEC,
            f"Invalid seat {seat_number!r}: {reason}",
            {"seat_number": seat_number},
        )


class MissingMaintenanceReasonError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(
            ErrorCode.MISSING_MAINTENANCE_REASON,
            "Maintenance reason is required when status is maintenance",
        )


class InvalidMaintenanceReasonError(InvalidRequestError):
    def __init__(self, reason: str, allowed: Iterable[str]) -> None:
        allowed = list(allowed)
        super().__init__(
            ErrorCode.INVALID_MAINTENANCE_REASON,
            f"Invalid maintenance reason: {reason}. Valid reasons: {', '.join(allowed)}",
            {"reason": reason, "allowed": allowed},
        )


class EmptySeatSelectionError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.EMPTY_SEAT_SELECTION, "Seat IDs list cannot be empty")


class InvalidDataError(InvalidRequestError):
    """A write was rejected by the database after passing validation."""

    def __init__(self, message: str = "Duplicate seat number detected or invalid data") -> None:
        super().__init__(ErrorCode.INVALID_DATA, message)


class HallNotFoundError(NotFoundError):
    def __init__(self, hall_id: int) -> None:
        super().__init__(ErrorCode.HALL_NOT_FOUND, "Hall not found", {"hall_id": hall_id})


class SeatNotFoundError(NotFoundError):
    def __init__(self, seat_id: int) -> None:
        super().__init__(ErrorCode.SEAT_NOT_FOUND, f"Seat not found: {seat_id}", {"seat_id": seat_id})


class SomeSeatsNotFoundError(NotFoundError):
    def __init__(self, requested: int, found: int) -> None:
        super().__init__(
            ErrorCode.SOME_SEATS_NOT_FOUND,
            f"Some seats not found. Requested: {requested}, Found: {found}",
            {"requested": requested, "found": found},
        )


class UserNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.USER_NOT_FOUND, "User not found")


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


class InvalidDateRangeError(InvalidRequestError):
    def __init__(self) -> None:
        super().__init__(ErrorCode.INVALID_DATE_RANGE, "Start date cannot be after end date")


class UnsupportedReportFormatError(InvalidRequestError):
    def __init__(self, requested: str, supported: Iterable[str]) -> None:
        supported = sorted(supported)
        super().__init__(
            ErrorCode.UNSUPPORTED_REPORT_FORMAT,
            f"Unsupported format: {requested}. Supported formats: {', '.join(supported)}",
            {"supported": supported},
        )
