from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from ..config import get_settings
from ..models.prescription import MAX_DOSE_ML, DayOfWeek, RegimenKind
from ..models.schedule import pickup_days, total_dose
from ..services.calendar import HolidayCalendar, get_holiday_calendar, today
from ..services.scheduling import generate_schedule
from ..services.validation import PrescriptionValidationError, default_form_values
from .schemas import (
    HolidayResponse,
    OptionResponse,
    PrescriptionFormResponse,
    ScheduleDayResponse,
    ScheduleResponse,
)

router = APIRouter(tags=["schedules"])


def get_today() -> date:
    return today(get_settings().TIMEZONE)


@router.get("/prescriptions/form", response_model=PrescriptionFormResponse)
def prescription_form():
    return PrescriptionFormResponse(
        defaults=default_form_values(),
        days_of_week=[OptionResponse(value=int(day), label=day.label) for day in DayOfWeek],
        regimen_kinds=[OptionResponse(value=kind.value, label=kind.value) for kind in RegimenKind],
        max_dose=MAX_DOSE_ML,
    )


@router.post("/schedules", response_model=ScheduleResponse)
def create_schedule(
    prescription: dict[str, Any] = Body(...),
    anchor_date: Optional[date] = Query(None),
    calendar: HolidayCalendar = Depends(get_holiday_calendar),
    current_date: date = Depends(get_today),
):
    anchor = anchor_date or current_date
    try:
        schedule = generate_schedule(prescription, anchor, is_holiday=calendar)
    except PrescriptionValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.as_detail())

    window_end = schedule[-1].date
    return ScheduleResponse(
        anchor_date=anchor,
        days=[ScheduleDayResponse.from_day(day) for day in schedule],
        pickup_count=len(pickup_days(schedule)),
        total_dose=total_dose(schedule),
        holidays=[
            HolidayResponse(date=day, name=name)
            for day, name in calendar.holidays_between(anchor, window_end)
        ],
    )
