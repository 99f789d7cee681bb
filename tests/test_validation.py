import pytest

from pickup_scheduler.models.prescription import (
    DayOfWeek,
    PrescriptionConfig,
    RegimenKind,
    StabilisationRegimen,
    VariableRegimen,
)
from pickup_scheduler.services.validation import (
    PrescriptionValidationError,
    default_form_values,
    validate_prescription,
)


def _messages(payload):
    with pytest.raises(PrescriptionValidationError) as excinfo:
        validate_prescription(payload)
    return [v.message for v in excinfo.value.violations]


def _fields(payload):
    with pytest.raises(PrescriptionValidationError) as excinfo:
        validate_prescription(payload)
    return [v.field for v in excinfo.value.violations]


def test_valid_stabilisation():
    config = validate_prescription(
        {"daysOfWeek": [1, 5], "regimenKind": "Stabilisation", "dosage": 30}
    )
    assert config.days_of_week == frozenset({DayOfWeek.MONDAY, DayOfWeek.FRIDAY})
    assert config.regimen == StabilisationRegimen(dosage=30)
    assert config.regimen_kind == RegimenKind.STABILISATION


def test_valid_increasing():
    config = validate_prescription(
        {
            "daysOfWeek": [0, 2],
            "regimenKind": "Increasing",
            "initialDailyDose": 10,
            "changeFrequencyDays": 3,
            "changeAmount": 5,
        }
    )
    assert config.regimen == VariableRegimen(
        kind=RegimenKind.INCREASING,
        initial_daily_dose=10,
        change_frequency_days=3,
        change_amount=5,
    )
    assert isinstance(config.regimen.change_frequency_days, int)


def test_day_names_and_legacy_field_names_accepted():
    config = validate_prescription(
        {
            "daysOfWeek": ["Monday", "friday"],
            "prescriptionType": "Reducing",
            "initialDailyDose": 30,
            "changeFrequency": 2,
            "changeAmount": 5,
        }
    )
    assert config.days_of_week == frozenset({DayOfWeek.MONDAY, DayOfWeek.FRIDAY})
    assert config.regimen_kind == RegimenKind.REDUCING
    assert config.regimen.change_frequency_days == 2


def test_all_days_selected():
    config = validate_prescription(
        {"daysOfWeek": list(range(7)), "regimenKind": "Stabilisation", "dosage": 10}
    )
    assert config.days_of_week == frozenset(DayOfWeek)


def test_fewer_than_two_days():
    messages = _messages({"daysOfWeek": [1], "regimenKind": "Stabilisation", "dosage": 30})
    assert messages == ["At least 2 days of the week must be selected"]


def test_repeated_day_counts_once():
    messages = _messages({"daysOfWeek": [1, 1], "regimenKind": "Stabilisation", "dosage": 30})
    assert "At least 2 days of the week must be selected" in messages


def test_missing_days_of_week():
    fields = _fields({"regimenKind": "Stabilisation", "dosage": 30})
    assert len(fields) == 1 and fields[0] in ("daysOfWeek", "days_of_week")


@pytest.mark.parametrize("bad_day", [7, -1, "InvalidDay"])
def test_invalid_weekday(bad_day):
    fields = _fields({"daysOfWeek": [1, bad_day], "regimenKind": "Stabilisation", "dosage": 30})
    assert fields and all(f.startswith("daysOfWeek") for f in fields)


def test_missing_regimen_kind():
    fields = _fields({"daysOfWeek": [1, 5], "dosage": 30})
    assert len(fields) == 1 and fields[0] in ("regimenKind", "prescriptionType", "regimen_kind")


def test_unknown_regimen_kind_skips_regimen_rules():
    fields = _fields({"daysOfWeek": [1, 5], "regimenKind": "InvalidType", "dosage": 30})
    assert fields == ["regimenKind"]


@pytest.mark.parametrize(
    "dosage,message",
    [(-5, "Dosage must be at least 0ml"), (61, "Dosage cannot exceed 60ml")],
)
def test_dosage_out_of_range(dosage, message):
    messages = _messages({"daysOfWeek": [1, 5], "regimenKind": "Stabilisation", "dosage": dosage})
    assert messages == [message]


@pytest.mark.parametrize("dosage", [0, 60, 12.5])
def test_dosage_bounds_inclusive(dosage):
    config = validate_prescription(
        {"daysOfWeek": [1, 5], "regimenKind": "Stabilisation", "dosage": dosage}
    )
    assert config.regimen.dosage == dosage


@pytest.mark.parametrize(
    "field,value,message",
    [
        ("initialDailyDose", -1, "Initial daily dose must be at least 0ml"),
        ("initialDailyDose", 70, "Initial daily dose cannot exceed 60ml"),
        ("changeAmount", -1, "Change amount must be at least 0ml"),
        ("changeAmount", 61, "Change amount cannot exceed 60ml"),
        ("changeFrequencyDays", 2.5, "Frequency must be a whole number"),
        ("changeFrequencyDays", 0, "Frequency must be a positive number"),
        ("changeFrequencyDays", -3, "Frequency must be a positive number"),
    ],
)
def test_variable_field_rules(field, value, message):
    payload = {
        "daysOfWeek": [1, 5],
        "regimenKind": "Increasing",
        "initialDailyDose": 10,
        "changeFrequencyDays": 3,
        "changeAmount": 5,
    }
    payload[field] = value
    assert _messages(payload) == [message]


def test_stabilisation_reports_missing_dosage_and_forbidden_fields_together():
    messages = _messages(
        {"daysOfWeek": [1, 5], "regimenKind": "Stabilisation", "initialDailyDose": 10}
    )
    assert "Dosage is required for this prescription type" in messages
    assert "Initial daily dose should not be provided for this prescription type" in messages


def test_stabilisation_forbids_every_variable_field():
    messages = _messages(
        {
            "daysOfWeek": [1, 5],
            "regimenKind": "Stabilisation",
            "dosage": 10,
            "initialDailyDose": 10,
            "changeFrequencyDays": 3,
            "changeAmount": 5,
        }
    )
    assert messages == [
        "Initial daily dose should not be provided for this prescription type",
        "Change frequency should not be provided for this prescription type",
        "Change amount should not be provided for this prescription type",
    ]


@pytest.mark.parametrize("kind", ["Increasing", "Reducing"])
def test_variable_requires_fields_and_forbids_dosage(kind):
    messages = _messages({"daysOfWeek": [1, 5], "regimenKind": kind, "dosage": 10})
    assert messages == [
        "Initial daily dose is required for this prescription type",
        "Change frequency is required for this prescription type",
        "Change amount is required for this prescription type",
        "Dosage should not be provided for this prescription type",
    ]


def test_null_counts_as_absent():
    config = validate_prescription(
        {
            "daysOfWeek": [1, 5],
            "regimenKind": "Stabilisation",
            "dosage": 10,
            "initialDailyDose": None,
            "changeFrequencyDays": None,
            "changeAmount": None,
        }
    )
    assert config.regimen == StabilisationRegimen(dosage=10)


def test_independent_rules_all_reported():
    with pytest.raises(PrescriptionValidationError) as excinfo:
        validate_prescription({"daysOfWeek": [1], "regimenKind": "Stabilisation", "dosage": 100})
    messages = [v.message for v in excinfo.value.violations]
    assert "At least 2 days of the week must be selected" in messages
    assert "Dosage cannot exceed 60ml" in messages
    assert "At least 2 days of the week must be selected" in str(excinfo.value)


def test_unknown_fields_rejected():
    fields = _fields(
        {"daysOfWeek": [1, 5], "regimenKind": "Stabilisation", "dosage": 10, "notes": "x"}
    )
    assert fields == ["notes"]


def test_non_mapping_rejected():
    assert _fields([1, 5]) == ["prescription"]


def test_config_revalidated_and_returned_unchanged():
    config = PrescriptionConfig(
        days_of_week=frozenset({DayOfWeek.TUESDAY, DayOfWeek.SATURDAY}),
        regimen=VariableRegimen(
            kind=RegimenKind.REDUCING,
            initial_daily_dose=40,
            change_frequency_days=7,
            change_amount=10,
        ),
    )
    assert validate_prescription(config) == config


def test_invalid_config_object_rejected():
    config = PrescriptionConfig(
        days_of_week=frozenset({DayOfWeek.MONDAY}),
        regimen=StabilisationRegimen(dosage=90),
    )
    messages = _messages(config)
    assert "At least 2 days of the week must be selected" in messages
    assert "Dosage cannot exceed 60ml" in messages


def test_variable_regimen_rejects_stabilisation_kind():
    with pytest.raises(ValueError):
        VariableRegimen(
            kind=RegimenKind.STABILISATION,
            initial_daily_dose=10,
            change_frequency_days=1,
            change_amount=1,
        )


def test_default_form_values():
    assert default_form_values() == {
        "daysOfWeek": [],
        "regimenKind": "Stabilisation",
        "dosage": None,
        "initialDailyDose": None,
        "changeFrequencyDays": None,
        "changeAmount": None,
    }
