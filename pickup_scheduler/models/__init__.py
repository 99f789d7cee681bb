from .prescription import (
    MAX_DOSE_ML,
    DayOfWeek,
    PrescriptionConfig,
    Regimen,
    RegimenKind,
    StabilisationRegimen,
    VariableRegimen,
)
from .schedule import SCHEDULE_WINDOW_DAYS, ScheduleDay, ScheduleResult, pickup_days, total_dose
