from datetime import date


def format_day(value: str) -> str:
    """Render an ISO date as e.g. ``Thu, Apr 24``."""
    day = date.fromisoformat(value)
    return f"{day:%a}, {day:%b} {day.day}"


def format_dose(dose: float) -> str:
    if float(dose).is_integer():
        return f"{int(dose)} mL"
    return f"{dose:g} mL"


def schedule_rows(days: list[dict]) -> list[dict]:
    return [
        {
            "Date": format_day(day["date"]),
            "Dose (mL)": format_dose(day["dose"]),
            "Available For Pickup": "Yes" if day["isPickupDay"] else "No",
        }
        for day in days
    ]


def build_payload(
    days_of_week: list[int],
    regimen_kind: str,
    dosage: float | None = None,
    initial_daily_dose: float | None = None,
    change_frequency_days: int | None = None,
    change_amount: float | None = None,
) -> dict:
    payload = {"daysOfWeek": days_of_week, "regimenKind": regimen_kind}
    if regimen_kind == "Stabilisation":
        payload["dosage"] = dosage
    else:
        payload["initialDailyDose"] = initial_daily_dose
        payload["changeFrequencyDays"] = change_frequency_days
        payload["changeAmount"] = change_amount
    return payload
