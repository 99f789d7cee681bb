from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.schedule import ScheduleDay


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScheduleDayResponse(CamelModel):
    index: int
    date: date
    is_pickup_day: bool
    dose: float

    @classmethod
    def from_day(cls, day: ScheduleDay) -> "ScheduleDayResponse":
        return cls(index=day.index, date=day.date, is_pickup_day=day.is_pickup_day, dose=day.dose)


class HolidayResponse(CamelModel):
    date: date
    name: str


class ScheduleResponse(CamelModel):
    anchor_date: date
    days: list[ScheduleDayResponse]
    pickup_count: int
    total_dose: float
    holidays: list[HolidayResponse]


class OptionResponse(CamelModel):
    value: int | str
    label: str


class PrescriptionFormResponse(CamelModel):
    defaults: dict
    days_of_week: list[OptionResponse]
    regimen_kinds: list[OptionResponse]
    max_dose: float
    dose_unit: str = "ml"


class HealthResponse(CamelModel):
    status: str
    environment: Optional[str] = None
