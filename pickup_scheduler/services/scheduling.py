from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any, Callable

from ..models.prescription import PrescriptionConfig
from ..models.schedule import SCHEDULE_WINDOW_DAYS, ScheduleDay, ScheduleResult
from .calendar import get_holiday_calendar
from .dosage import DoseStrategy, select_dose_strategy
from .validation import validate_prescription

logger = logging.getLogger(__name__)

HolidayCheck = Callable[[date], bool]


class PickupScheduleEngine:
    def __init__(self, is_holiday: HolidayCheck | None = None):
        self.is_holiday = is_holiday if is_holiday is not None else get_holiday_calendar()

    def calculate_schedule(
        self,
        config: PrescriptionConfig,
        anchor_date: date,
        dose_strategy: DoseStrategy | None = None,
    ) -> ScheduleResult:
        strategy = dose_strategy or select_dose_strategy(config)
        # Slots are rewritten when a later non-pickup day folds its dose back.
        schedule: list[ScheduleDay | None] = [None] * SCHEDULE_WINDOW_DAYS
        first_pickup_day: ScheduleDay | None = None
        last_pickup_index: int | None = None

        for i in range(SCHEDULE_WINDOW_DAYS):
            current_date = anchor_date + timedelta(days=i)
            is_pickup_day = self._is_pickup_day(config, current_date)
            raw_dose = strategy(current_date, first_pickup_day)

            entry = ScheduleDay(
                index=i,
                date=current_date,
                is_pickup_day=is_pickup_day,
                dose=raw_dose if is_pickup_day else 0,
            )

            if is_pickup_day:
                if first_pickup_day is None:
                    first_pickup_day = entry
                last_pickup_index = i
            elif last_pickup_index is not None:
                carried_into = schedule[last_pickup_index]
                schedule[last_pickup_index] = dataclasses.replace(
                    carried_into, dose=carried_into.dose + raw_dose
                )

            schedule[i] = entry

        return tuple(schedule)

    def _is_pickup_day(self, config: PrescriptionConfig, day: date) -> bool:
        return config.is_selected(day) and not self.is_holiday(day)


def generate_schedule(
    prescription: Mapping[str, Any] | PrescriptionConfig,
    anchor_date: date,
    is_holiday: HolidayCheck | None = None,
) -> ScheduleResult:
    config = validate_prescription(prescription)
    engine = PickupScheduleEngine(is_holiday=is_holiday)
    schedule = engine.calculate_schedule(config, anchor_date)
    logger.info(
        "Generated %s schedule from %s with %s pickup day(s)",
        config.regimen_kind.value,
        anchor_date.isoformat(),
        sum(1 for day in schedule if day.is_pickup_day),
    )
    return schedule
