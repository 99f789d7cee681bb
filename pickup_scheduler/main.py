import uuid

from fastapi import FastAPI, Request

from .config import get_settings
from .logging_config import configure_logging
from .api.health import router as health_router
from .api.schedules import router as schedules_router


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="Medication Pickup Schedule Planner", version="0.1.0")

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(schedules_router, prefix="/api/v1")

    return app


app = create_app()
