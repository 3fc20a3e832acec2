"""
Health Router - Liveness probe
"""

from fastapi import APIRouter, Depends

from aipipe.settings import Settings
from aipipe.utils.timestamps import utc_now_iso
from api.dependencies import get_app_settings
from api.schemas.health import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz(cfg: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Liveness probe: always ok while the process is serving."""
    return HealthResponse(service=cfg.service_name, time=utc_now_iso())
