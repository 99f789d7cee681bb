from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..models.prescription import (
    MAX_DOSE_ML,
    DayOfWeek,
    PrescriptionConfig,
    RegimenKind,
    StabilisationRegimen,
    VariableRegimen,
)

logger = logging.getLogger(__name__)

# Accepted input keys per field; the first key is the canonical wire name.
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "days_of_week": ("daysOfWeek", "days_of_week"),
    "regimen_kind": ("regimenKind", "prescriptionType", "regimen_kind"),
    "dosage": ("dosage",),
    "initial_daily_dose": ("initialDailyDose", "initial_daily_dose"),
    "change_frequency_days": ("changeFrequencyDays", "changeFrequency", "change_frequency_days"),
    "change_amount": ("changeAmount", "change_amount"),
}

FIELD_LABELS = {
    "dosage": "Dosage",
    "initial_daily_dose": "Initial daily dose",
    "change_frequency_days": "Change frequency",
    "change_amount": "Change amount",
}

VARIABLE_FIELDS = ("initial_daily_dose", "change_frequency_days", "change_amount")


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


class PrescriptionValidationError(Exception):
    """Raised when a prescription breaks one or more rules; carries all of them."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__("; ".join(v.message for v in self.violations))

    def as_detail(self) -> list[dict[str, str]]:
        return [{"field": v.field, "message": v.message} for v in self.violations]


def _aliases(name: str) -> AliasChoices:
    return AliasChoices(*FIELD_KEYS[name])


def _day_from_name(value: Any) -> Any:
    if isinstance(value, str) and not value.strip().isdigit():
        try:
            return DayOfWeek[value.strip().upper()]
        except KeyError:
            return value
    return value


def _check_dose_range(value: Optional[float], label: str) -> Optional[float]:
    if value is None:
        return value
    if value < 0:
        raise ValueError(f"{label} must be at least 0ml")
    if value > MAX_DOSE_ML:
        raise ValueError(f"{label} cannot exceed {MAX_DOSE_ML}ml")
    return value


class PrescriptionForm(BaseModel):
    model_config = ConfigDict(extra="forbid")

    days_of_week: list[DayOfWeek] = Field(validation_alias=_aliases("days_of_week"))
    regimen_kind: RegimenKind = Field(validation_alias=_aliases("regimen_kind"))
    dosage: Optional[float] = Field(
        default=None, allow_inf_nan=False, validation_alias=_aliases("dosage")
    )
    initial_daily_dose: Optional[float] = Field(
        default=None, allow_inf_nan=False, validation_alias=_aliases("initial_daily_dose")
    )
    change_frequency_days: Optional[float] = Field(
        default=None, allow_inf_nan=False, validation_alias=_aliases("change_frequency_days")
    )
    change_amount: Optional[float] = Field(
        default=None, allow_inf_nan=False, validation_alias=_aliases("change_amount")
    )

    @field_validator("days_of_week", mode="before")
    @classmethod
    def _parse_day_names(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return [_day_from_name(v) for v in value]
        return value

    @field_validator("days_of_week")
    @classmethod
    def _at_least_two_days(cls, value: list[DayOfWeek]) -> list[DayOfWeek]:
        if len(set(value)) < 2:
            raise ValueError("At least 2 days of the week must be selected")
        return value

    @field_validator("dosage", "initial_daily_dose", "change_amount")
    @classmethod
    def _dose_in_range(cls, value: Optional[float], info) -> Optional[float]:
        return _check_dose_range(value, FIELD_LABELS[info.field_name])

    @field_validator("change_frequency_days")
    @classmethod
    def _whole_positive_frequency(cls, value: Optional[float]) -> Optional[int]:
        if value is None:
            return value
        if not float(value).is_integer():
            raise ValueError("Frequency must be a whole number")
        if value <= 0:
            raise ValueError("Frequency must be a positive number")
        return int(value)

    def to_config(self) -> PrescriptionConfig:
        if self.regimen_kind == RegimenKind.STABILISATION:
            regimen = StabilisationRegimen(dosage=self.dosage)
        else:
            regimen = VariableRegimen(
                kind=self.regimen_kind,
                initial_daily_dose=self.initial_daily_dose,
                change_frequency_days=int(self.change_frequency_days),
                change_amount=self.change_amount,
            )
        return PrescriptionConfig(days_of_week=frozenset(self.days_of_week), regimen=regimen)


def default_form_values() -> dict[str, Any]:
    return {
        "daysOfWeek": [],
        "regimenKind": RegimenKind.STABILISATION.value,
        "dosage": None,
        "initialDailyDose": None,
        "changeFrequencyDays": None,
        "changeAmount": None,
    }


def _provided(payload: Mapping[str, Any], name: str) -> bool:
    return any(payload.get(key) is not None for key in FIELD_KEYS[name])


def _violations_from(exc: ValidationError) -> list[Violation]:
    violations: list[Violation] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "prescription"
        message = error["msg"].removeprefix("Value error, ")
        violations.append(Violation(field=field, message=message))
    return violations


def _regimen_rule_violations(payload: Mapping[str, Any]) -> list[Violation]:
    raw_kind = next(
        (payload[key] for key in FIELD_KEYS["regimen_kind"] if payload.get(key) is not None),
        None,
    )
    try:
        kind = RegimenKind(raw_kind)
    except ValueError:
        # missing or unknown kinds are reported by the field checks
        return []

    violations: list[Violation] = []
    if kind == RegimenKind.STABILISATION:
        if not _provided(payload, "dosage"):
            violations.append(
                Violation("dosage", "Dosage is required for this prescription type")
            )
        for name in VARIABLE_FIELDS:
            if _provided(payload, name):
                violations.append(
                    Violation(
                        FIELD_KEYS[name][0],
                        f"{FIELD_LABELS[name]} should not be provided for this prescription type",
                    )
                )
    else:
        for name in VARIABLE_FIELDS:
            if not _provided(payload, name):
                violations.append(
                    Violation(
                        FIELD_KEYS[name][0],
                        f"{FIELD_LABELS[name]} is required for this prescription type",
                    )
                )
        if _provided(payload, "dosage"):
            violations.append(
                Violation("dosage", "Dosage should not be provided for this prescription type")
            )
    return violations


def validate_prescription(payload: Mapping[str, Any] | PrescriptionConfig) -> PrescriptionConfig:
    """Check a prescription against every field and regimen rule.

    Accepts the wire mapping or an already-built ``PrescriptionConfig`` (which is
    re-checked through its wire form). All violations are collected before
    raising, so callers can show them together.
    """
    if isinstance(payload, PrescriptionConfig):
        payload = payload.to_payload()
    if not isinstance(payload, Mapping):
        raise PrescriptionValidationError(
            [Violation("prescription", "Prescription must be an object")]
        )

    violations: list[Violation] = []
    form: PrescriptionForm | None = None
    try:
        form = PrescriptionForm.model_validate(dict(payload))
    except ValidationError as exc:
        violations.extend(_violations_from(exc))
    violations.extend(_regimen_rule_violations(payload))

    if violations:
        logger.warning("Prescription rejected with %s violation(s)", len(violations))
        raise PrescriptionValidationError(violations)

    return form.to_config()
