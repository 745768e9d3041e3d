import enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class Weekday(str, enum.Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @property
    def position(self) -> int:
        return WEEKDAYS.index(self)


WEEKDAYS = tuple(Weekday)


# Times are kept as the "HH:mm" strings the owner submitted so a save followed
# by a read returns them untouched. Format checks live in the shift validator.
class Shift(BaseModel):
    id: Optional[str] = None
    name: str
    start_time: str
    end_time: str


class DayHours(BaseModel):
    open: str
    close: str
    shifts: List[Shift] = []


# POST /owner/halls/{hall_id}/shifts
class ShiftConfigRequest(BaseModel):
    opening_hours: Dict[Weekday, DayHours]


class ShiftConfigResponse(BaseModel):
    success: bool
    message: str
    opening_hours: Dict[Weekday, DayHours]
