"""
Opening-hours and shift validation.

Everything in this module is pure: no database access, no mutation of the
caller's data. The week is held in a fixed seven-slot table indexed by
``Weekday`` so an unknown day name can never reach validation or storage.
"""

import re
from datetime import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from app.core.exceptions import (
    EmptyConfigurationError,
    InvalidWeekdayError,
    InvalidShiftRangeError,
    InvalidTimeFormatError,
    MalformedDayHoursError,
    OpenNotBeforeCloseError,
    ShiftOutsideOperatingHoursError,
    ShiftOverlapError,
)
from app.schemas.shift import WEEKDAYS, DayHours, Shift, Weekday

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_hhmm(value: Any) -> Optional[time]:
    """Parse a strict 24-hour ``HH:mm`` string, returning None when malformed."""
    if not isinstance(value, str):
        return None
    match = _HHMM.match(value)
    if not match:
        return None
    return time(int(match.group(1)), int(match.group(2)))


_TIME_FIELDS = {
    "open": "Opening time",
    "close": "Closing time",
    "start_time": "Shift start time",
    "end_time": "Shift end time",
}


def _coerce_day_hours(day_name: str, raw: Any) -> DayHours:
    """Build DayHours from a raw mapping (request body or stored JSON).

    A missing or non-string time is reported like a malformed one; any other
    structural fault (a non-object day, a shift without a name) is reported
    against the whole day.
    """
    try:
        return DayHours.model_validate(raw)
    except ValidationError as exc:
        for error in exc.errors():
            loc = error.get("loc") or ()
            if loc and loc[-1] in _TIME_FIELDS:
                raise InvalidTimeFormatError(_TIME_FIELDS[loc[-1]], day_name) from None
        raise MalformedDayHoursError(day_name) from None


class WeekSchedule:
    """Seven-slot table of DayHours, one optional entry per weekday."""

    __slots__ = ("_days",)

    def __init__(self, days: Optional[Mapping[Union[Weekday, str], DayHours]] = None) -> None:
        self._days: List[Optional[DayHours]] = [None] * len(WEEKDAYS)
        for day, hours in (days or {}).items():
            self[day] = hours

    @staticmethod
    def _slot(day: Union[Weekday, str]) -> int:
        try:
            return Weekday(day.lower() if isinstance(day, str) else day).position
        except ValueError:
            raise InvalidWeekdayError(str(day)) from None

    def __getitem__(self, day: Union[Weekday, str]) -> Optional[DayHours]:
        return self._days[self._slot(day)]

    def __setitem__(self, day: Union[Weekday, str], hours: Union[DayHours, Mapping[str, Any]]) -> None:
        slot = self._slot(day)
        if not isinstance(hours, DayHours):
            hours = _coerce_day_hours(WEEKDAYS[slot].value, hours)
        self._days[slot] = hours

    def __len__(self) -> int:
        return sum(1 for hours in self._days if hours is not None)

    def __bool__(self) -> bool:
        return len(self) > 0

    def items(self) -> Iterator[Tuple[Weekday, DayHours]]:
        """Configured days in calendar order, Monday first."""
        for day, hours in zip(WEEKDAYS, self._days):
            if hours is not None:
                yield day, hours

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {day.value: hours.model_dump() for day, hours in self.items()}

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "WeekSchedule":
        return cls(raw or {})


def _require_time(value: Any, field: str, day: str) -> time:
    parsed = parse_hhmm(value)
    if parsed is None:
        raise InvalidTimeFormatError(field, day)
    return parsed


def validate_day(day: Weekday, hours: DayHours) -> None:
    """Validate one day's envelope and its shifts.

    Shifts are checked in start-time order. The sort is stable, so two shifts
    sharing a start time keep the order the owner submitted them in and the
    overlap error names them in that order.
    """
    day_name = day.value
    open_at = _require_time(hours.open, "Opening time", day_name)
    close_at = _require_time(hours.close, "Closing time", day_name)

    if open_at >= close_at:
        raise OpenNotBeforeCloseError(day_name)

    if not hours.shifts:
        return

    parsed: List[Tuple[Shift, time, time]] = []
    for shift in hours.shifts:
        start = _require_time(shift.start_time, "Shift start time", day_name)
        end = _require_time(shift.end_time, "Shift end time", day_name)
        parsed.append((shift, start, end))

    parsed.sort(key=lambda entry: entry[1])

    for i, (shift, start, end) in enumerate(parsed):
        if start >= end:
            raise InvalidShiftRangeError(day_name, shift.name)

        if start < open_at or end > close_at:
            raise ShiftOutsideOperatingHoursError(day_name, shift.name)

        if i + 1 < len(parsed):
            next_shift, next_start, _ = parsed[i + 1]
            # Touching shifts (end == next start) are fine
            if end > next_start:
                raise ShiftOverlapError(day_name, shift.name, next_shift.name)


def validate_opening_hours(
    opening_hours: Union[WeekSchedule, Mapping[Union[Weekday, str], DayHours], None],
) -> WeekSchedule:
    """Validate a full week of opening hours.

    Returns the schedule as a WeekSchedule on success; raises the first
    InvalidRequestError found, scanning days Monday to Sunday.
    """
    schedule = opening_hours if isinstance(opening_hours, WeekSchedule) else WeekSchedule(opening_hours)
    if not schedule:
        raise EmptyConfigurationError()

    for day, hours in schedule.items():
        validate_day(day, hours)

    return schedule
