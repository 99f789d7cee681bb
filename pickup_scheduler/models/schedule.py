from __future__ import annotations

from dataclasses import dataclass
from datetime import date

SCHEDULE_WINDOW_DAYS = 14


@dataclass(frozen=True)
class ScheduleDay:
    index: int
    date: date
    is_pickup_day: bool
    dose: float


ScheduleResult = tuple[ScheduleDay, ...]


def pickup_days(schedule: ScheduleResult) -> list[ScheduleDay]:
    return [day for day in schedule if day.is_pickup_day]


def total_dose(schedule: ScheduleResult) -> float:
    return sum(day.dose for day in schedule)
