from fastapi import APIRouter

from ..config import get_settings
from .schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", environment=get_settings().ENVIRONMENT)
