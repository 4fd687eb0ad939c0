"""API routes for wind profile operations."""
from fastapi import APIRouter, Depends

from backend.schemas.wind import (
    InterpolateRequest,
    InterpolateResponse,
    WindWarningsRequest,
    WindWarningsResponse,
)
from backend.services.wind_service import WindService
from backend.api.dependencies import get_wind_service

router = APIRouter(prefix="/winds", tags=["winds"])


@router.post("/interpolate", response_model=InterpolateResponse)
async def interpolate_wind(
    request: InterpolateRequest,
    wind_service: WindService = Depends(get_wind_service),
) -> InterpolateResponse:
    """Get interpolated wind at the requested altitudes (clamped at the profile edges)."""
    return wind_service.interpolate(request)


@router.post("/warnings", response_model=WindWarningsResponse)
async def get_wind_warnings(
    request: WindWarningsRequest,
    wind_service: WindService = Depends(get_wind_service),
) -> WindWarningsResponse:
    """Get ground wind warning levels against student and sport limits."""
    return wind_service.get_warnings(request)
