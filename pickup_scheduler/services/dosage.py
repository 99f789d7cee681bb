from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..models.prescription import PrescriptionConfig, StabilisationRegimen, VariableRegimen
from ..models.schedule import ScheduleDay

DoseStrategy = Callable[[date, Optional[ScheduleDay]], float]


def stabilisation_dose(regimen: StabilisationRegimen) -> DoseStrategy:
    dosage = regimen.dosage

    def dose(current_date: date, first_pickup_day: ScheduleDay | None) -> float:
        return dosage

    return dose


def variable_dose(regimen: VariableRegimen) -> DoseStrategy:
    """Dose stepped by ``change_amount`` every ``change_frequency_days`` after the first pickup.

    The dose for a day is derived only from the days elapsed since the first
    pickup, never from previously computed doses. Reducing regimens stop at 0.
    """
    initial = regimen.initial_daily_dose
    frequency = regimen.change_frequency_days
    step = regimen.change_amount if regimen.is_increasing else -regimen.change_amount

    def dose(current_date: date, first_pickup_day: ScheduleDay | None) -> float:
        if first_pickup_day is None:
            return initial
        days_elapsed = (current_date - first_pickup_day.date).days
        change_count = days_elapsed // frequency
        return max(0, initial + step * change_count)

    return dose


def select_dose_strategy(config: PrescriptionConfig) -> DoseStrategy:
    regimen = config.regimen
    if isinstance(regimen, StabilisationRegimen):
        return stabilisation_dose(regimen)
    return variable_dose(regimen)
