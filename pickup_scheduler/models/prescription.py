from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, Union

MAX_DOSE_ML = 60


class DayOfWeek(enum.IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> "DayOfWeek":
        # isoweekday() runs Monday=1..Sunday=7
        return cls(day.isoweekday() % 7)

    @property
    def label(self) -> str:
        return self.name.title()


class RegimenKind(str, enum.Enum):
    STABILISATION = "Stabilisation"
    INCREASING = "Increasing"
    REDUCING = "Reducing"


@dataclass(frozen=True)
class StabilisationRegimen:
    dosage: float

    @property
    def kind(self) -> RegimenKind:
        return RegimenKind.STABILISATION


@dataclass(frozen=True)
class VariableRegimen:
    kind: RegimenKind
    initial_daily_dose: float
    change_frequency_days: int
    change_amount: float

    def __post_init__(self) -> None:
        if self.kind == RegimenKind.STABILISATION:
            raise ValueError("VariableRegimen must be Increasing or Reducing")

    @property
    def is_increasing(self) -> bool:
        return self.kind == RegimenKind.INCREASING


Regimen = Union[StabilisationRegimen, VariableRegimen]


@dataclass(frozen=True)
class PrescriptionConfig:
    days_of_week: frozenset[DayOfWeek]
    regimen: Regimen

    @property
    def regimen_kind(self) -> RegimenKind:
        return self.regimen.kind

    def is_selected(self, day: date) -> bool:
        return DayOfWeek.of(day) in self.days_of_week

    def to_payload(self) -> dict[str, Any]:
        """Render the config in its wire form so it can be run back through validation."""
        payload: dict[str, Any] = {
            "daysOfWeek": sorted(int(d) for d in self.days_of_week),
            "regimenKind": self.regimen_kind.value,
        }
        if isinstance(self.regimen, StabilisationRegimen):
            payload["dosage"] = self.regimen.dosage
        else:
            payload["initialDailyDose"] = self.regimen.initial_daily_dose
            payload["changeFrequencyDays"] = self.regimen.change_frequency_days
            payload["changeAmount"] = self.regimen.change_amount
        return payload
