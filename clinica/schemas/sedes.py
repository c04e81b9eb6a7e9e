"""Sede (location) schemas and weekly availability."""

from datetime import datetime, time
from typing import Annotated

from pydantic import AfterValidator, Field, model_validator

from clinica.schemas.common import CamelModel, ClockTime

WEEKDAYS = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo"]
WORK_DAYS = WEEKDAYS[:5]


class TimeInterval(CamelModel):
    """Opening interval within a day."""

    start: ClockTime
    end: ClockTime

    @model_validator(mode="after")
    def check_order(self) -> "TimeInterval":
        """Intervals must end after they start."""
        if self.end <= self.start:
            raise ValueError("Interval end must be after start")
        return self


class DayAvailability(CamelModel):
    """Open flag plus intervals for one weekday."""

    is_open: bool = False
    intervals: list[TimeInterval] = []


def _interval(start: str, end: str) -> TimeInterval:
    return TimeInterval(start=time.fromisoformat(start), end=time.fromisoformat(end))


def default_availability() -> dict[str, DayAvailability]:
    """Standard week: split shifts Mon-Fri, mornings on Saturday, closed Sunday."""
    weekday = [_interval("09:00", "13:00"), _interval("14:00", "18:00")]
    availability = {
        day: DayAvailability(is_open=True, intervals=list(weekday)) for day in WORK_DAYS
    }
    availability["Sábado"] = DayAvailability(is_open=True, intervals=[_interval("09:00", "13:00")])
    availability["Domingo"] = DayAvailability(is_open=False, intervals=[])
    return availability


def validate_weekdays(value: dict[str, DayAvailability]) -> dict[str, DayAvailability]:
    """Reject unknown weekday keys."""
    unknown = [day for day in value if day not in WEEKDAYS]
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
    return value


WeeklyAvailability = Annotated[dict[str, DayAvailability], AfterValidator(validate_weekdays)]


class SedeBase(CamelModel):
    """Base sede schema."""

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1)
    phone: str | None = Field(None, max_length=30)
    whatsapp: str | None = Field(None, max_length=30)


class SedeCreate(SedeBase):
    """Schema for creating a sede."""

    availability: WeeklyAvailability | None = None


class SedeUpdate(CamelModel):
    """Schema for updating sede details."""

    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = Field(None, min_length=1)
    phone: str | None = Field(None, max_length=30)
    whatsapp: str | None = Field(None, max_length=30)
    availability: WeeklyAvailability | None = None


class AvailabilityUpdate(CamelModel):
    """Replace a sede's weekly availability."""

    availability: WeeklyAvailability


class SedeResponse(SedeBase):
    """Sede response schema."""

    id: str
    company_id: str | None = None
    availability: dict[str, DayAvailability] = {}
    created_at: datetime | None = None
    updated_at: datetime | None = None
