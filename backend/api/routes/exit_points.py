"""API routes for exit point calculations."""
from typing import List
from fastapi import APIRouter, Depends

from backend.schemas.exit_point import (
    ExitCalculationResponse,
    ExitPointRequest,
    MultiProfileRequest,
    ProfileResultResponse,
)
from backend.services.calculation_service import CalculationService
from backend.api.dependencies import get_calculation_service

router = APIRouter(prefix="/exit-points", tags=["exit-points"])


@router.post("", response_model=ExitCalculationResponse)
async def calculate_exit_points(
    request: ExitPointRequest,
    calculation_service: CalculationService = Depends(get_calculation_service),
) -> ExitCalculationResponse:
    """
    Calculate exit points for one jump profile.

    Returns the group exit points, drift for both descent phases and the
    geometry (drift paths, ground track) for display.
    """
    return calculation_service.calculate(request)


@router.post("/profiles", response_model=List[ProfileResultResponse])
async def calculate_profiles(
    request: MultiProfileRequest,
    calculation_service: CalculationService = Depends(get_calculation_service),
) -> List[ProfileResultResponse]:
    """
    Calculate exit points for every enabled profile on a load.

    A profile with invalid parameters reports an error without failing the
    other profiles.
    """
    return calculation_service.calculate_profiles(request)
