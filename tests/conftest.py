import os
from datetime import date

import pytest

# Ensure settings are predictable before package imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("HOLIDAY_COUNTRY", "GB")
os.environ.setdefault("HOLIDAY_SUBDIVISION", "ENG")


@pytest.fixture
def thursday() -> date:
    # Early May bank holiday (Mon 5 May 2025) falls inside this window
    return date(2025, 4, 24)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from pickup_scheduler.config import get_settings
    from pickup_scheduler.main import create_app
    from pickup_scheduler.services.calendar import get_holiday_calendar

    get_settings.cache_clear()
    get_holiday_calendar.cache_clear()
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
