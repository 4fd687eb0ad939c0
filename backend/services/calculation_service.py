"""Service for exit point calculations over the API."""
import hashlib
from collections import OrderedDict
from typing import List

from exit_engine.exceptions import CalculationError, InvalidParameterError, NoWindDataError
from exit_engine.models.geo import LatLon, TerrainData
from exit_engine.models.jump import CommonParameters, JumpParameters
from exit_engine.models.wind import WindProfile
from exit_engine.services.descent_integrator import DescentIntegrator
from exit_engine.services.exit_calculator import ExitCalculator
from exit_engine.services.exit_point_solver import ExitPointSolver

from backend.config import settings
from backend.schemas.exit_point import (
    CommonParametersSchema,
    ExitCalculationResponse,
    ExitPointRequest,
    JumpParametersSchema,
    MultiProfileRequest,
    ProfileResultResponse,
)
from backend.schemas.wind import WindSampleSchema


def to_wind_profile(samples: List[WindSampleSchema]) -> WindProfile:
    """Build an engine wind profile from request samples."""
    return WindProfile.from_records(s.model_dump() for s in samples)


def to_common_parameters(schema: CommonParametersSchema) -> CommonParameters:
    """Build engine common parameters from the request schema."""
    return CommonParameters(
        landing_zone=LatLon(lat=schema.landing_zone.lat, lon=schema.landing_zone.lon),
        flight_direction=schema.flight_direction,
        flight_over_landing_zone=schema.flight_over_landing_zone,
        jump_time=schema.jump_time,
        number_of_groups=schema.number_of_groups,
        time_between_groups=schema.time_between_groups,
    )


def to_jump_parameters(schema: JumpParametersSchema) -> JumpParameters:
    """Build engine jump parameters from the request schema."""
    return JumpParameters(**schema.model_dump())


def build_calculator() -> ExitCalculator:
    """Exit calculator configured from settings."""
    return ExitCalculator(
        solver=ExitPointSolver(
            integrator=DescentIntegrator(
                freefall_step=settings.freefall_step,
                canopy_step=settings.canopy_step,
            ),
            pattern_offset_angle=settings.pattern_offset_angle,
            pattern_offset_distance=settings.pattern_offset_distance,
            strict_coverage=settings.strict_coverage,
        ),
        wind_corrected_spacing=settings.wind_corrected_spacing,
    )


class CalculationService:
    """Service for exit point calculations.

    Results are cached in memory (LRU) keyed by a hash of the request. The
    engine is deterministic, so a cached result is identical to a fresh one.
    """

    def __init__(self, calculator: ExitCalculator = None, cache_size: int = None):
        self.calculator = calculator or build_calculator()
        self.cache_size = cache_size if cache_size is not None else settings.result_cache_size
        self._cache: OrderedDict[str, ExitCalculationResponse] = OrderedDict()

    @staticmethod
    def _cache_key(request: ExitPointRequest) -> str:
        return hashlib.sha256(request.model_dump_json().encode()).hexdigest()

    def calculate(self, request: ExitPointRequest) -> ExitCalculationResponse:
        """
        Calculate exit points for a single parameter set.

        Raises:
            CalculationError: When any input fails validation
        """
        key = self._cache_key(request)
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]

        common = to_common_parameters(request.common)
        result = self.calculator.calculate(
            to_wind_profile(request.wind_profile),
            to_jump_parameters(request.jump),
            common,
            TerrainData(location=common.landing_zone, elevation=request.elevation),
        )
        response = ExitCalculationResponse(**result.to_dict())

        if self.cache_size > 0:
            self._cache[key] = response
            if len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)

        return response

    def calculate_profiles(self, request: MultiProfileRequest) -> List[ProfileResultResponse]:
        """
        Calculate every enabled profile against the same load settings.

        A profile whose parameters are invalid gets an error message instead
        of a result; the other profiles are still calculated.
        """
        enabled = [p for p in request.profiles if p.enabled]
        if not enabled:
            raise InvalidParameterError("Please enable at least one profile", parameter="profiles")

        # Shared inputs fail the whole request, not each profile
        if not to_wind_profile(request.wind_profile).samples:
            raise NoWindDataError("No wind data available for calculations")
        to_common_parameters(request.common)

        results = []
        for profile in enabled:
            try:
                response = self.calculate(ExitPointRequest(
                    wind_profile=request.wind_profile,
                    jump=profile.parameters,
                    common=request.common,
                    elevation=request.elevation,
                ))
                results.append(ProfileResultResponse(
                    profile_id=profile.profile_id,
                    name=profile.name,
                    result=response,
                ))
            except CalculationError as e:
                results.append(ProfileResultResponse(
                    profile_id=profile.profile_id,
                    name=profile.name,
                    error=str(e),
                ))
        return results
