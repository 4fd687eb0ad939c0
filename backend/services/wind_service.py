"""Service for wind profile lookups and ground wind warnings."""
from typing import List

from exit_engine.services.wind_warnings import WindWarningService

from backend.config import settings
from backend.schemas.wind import (
    InterpolateRequest,
    InterpolateResponse,
    WindSampleSchema,
    WindWarning,
    WindWarningsRequest,
    WindWarningsResponse,
)
from backend.services.calculation_service import to_wind_profile


class WindService:
    """Service for wind operations."""

    def interpolate(self, request: InterpolateRequest) -> InterpolateResponse:
        """Interpolated wind samples at the requested altitudes."""
        profile = to_wind_profile(request.wind_profile)
        samples: List[WindSampleSchema] = [
            WindSampleSchema(**profile.sample_at(altitude).to_dict())
            for altitude in request.altitudes
        ]
        return InterpolateResponse(samples=samples)

    def get_warnings(self, request: WindWarningsRequest) -> WindWarningsResponse:
        """Warning levels for every sample, using the request or default limits."""
        warnings = WindWarningService(
            student_limit=request.student_limit or settings.student_wind_limit,
            sport_limit=request.sport_limit or settings.sport_wind_limit,
            ground_height=settings.ground_wind_height,
        )
        profile = to_wind_profile(request.wind_profile)
        summary = warnings.summarize(profile.samples, request.elevation)
        return WindWarningsResponse(
            levels=[WindWarning(**level) for level in warnings.classify(profile.samples, request.elevation)],
            has_high=summary["has_high"],
            has_moderate=summary["has_moderate"],
        )
