"""Service for integrating horizontal drift over a vertical descent."""
import math
from typing import Optional

import numpy as np

from exit_engine.config import CANOPY_STEP_M, FREEFALL_STEP_M
from exit_engine.exceptions import InvalidAltitudeRangeError, InvalidParameterError
from exit_engine.models.jump import JumpParameters
from exit_engine.models.results import DriftResult
from exit_engine.models.wind import WindProfile
from exit_engine.utils.vector_utils import heading_to_unit


class DescentIntegrator:
    """Service for computing drift during freefall and under canopy.

    The descent is cut into equal altitude steps no taller than the configured
    step size. Each step uses the wind at its midpoint altitude for the time
    it takes to fall through the step, so finer steps converge on the integral
    of wind(h) / vertical_speed dh.
    """

    def __init__(
        self,
        freefall_step: float = FREEFALL_STEP_M,
        canopy_step: float = CANOPY_STEP_M,
    ):
        """
        Initialize descent integrator.

        Args:
            freefall_step: Altitude resolution for freefall (meters)
            canopy_step: Altitude resolution under canopy (meters)
        """
        for name, value in (("freefall_step", freefall_step), ("canopy_step", canopy_step)):
            if not value > 0:
                raise InvalidParameterError(
                    f"{name} must be positive, got {value}", parameter=name
                )
        self.freefall_step = freefall_step
        self.canopy_step = canopy_step

    def integrate(
        self,
        profile: WindProfile,
        start_altitude: float,
        end_altitude: float,
        vertical_speed: float,
        horizontal_airspeed: float = 0.0,
        heading: Optional[float] = None,
        step_size: Optional[float] = None,
    ) -> DriftResult:
        """
        Integrate drift from start_altitude down to end_altitude.

        Wind and the jumper's own airspeed act at the same time: every step
        moves by (wind + airspeed) x step time.

        Args:
            profile: Wind profile (altitudes AMSL)
            start_altitude: Altitude where the descent starts (meters AMSL)
            end_altitude: Altitude where it ends (meters AMSL)
            vertical_speed: Descent rate (m/s)
            horizontal_airspeed: Forward airspeed (m/s), 0 for freefall
            heading: Compass direction of the airspeed; no airspeed applies
                without one
            step_size: Altitude resolution, defaults to the freefall step

        Returns:
            DriftResult with total drift, elapsed time and cumulative path
        """
        span = start_altitude - end_altitude
        if not span > 0:
            raise InvalidAltitudeRangeError(
                f"Descent must go down: start {start_altitude} m, end {end_altitude} m"
            )
        if not vertical_speed > 0:
            raise InvalidParameterError(
                f"Vertical speed must be positive, got {vertical_speed}",
                parameter="vertical_speed",
            )
        if horizontal_airspeed < 0:
            raise InvalidParameterError(
                f"Horizontal airspeed must be non-negative, got {horizontal_airspeed}",
                parameter="horizontal_airspeed",
            )
        if step_size is None:
            step_size = self.freefall_step
        elif not step_size > 0:
            raise InvalidParameterError(
                f"Step size must be positive, got {step_size}", parameter="step_size"
            )

        num_steps = max(1, math.ceil(span / step_size))
        step_height = span / num_steps
        midpoints = start_altitude - (np.arange(num_steps) + 0.5) * step_height

        velocities = profile.wind_vectors(midpoints)
        if heading is not None and horizontal_airspeed > 0:
            velocities = velocities + heading_to_unit(heading) * horizontal_airspeed

        step_time = step_height / vertical_speed
        displacements = velocities * step_time
        path = np.vstack([np.zeros((1, 2)), np.cumsum(displacements, axis=0)])

        return DriftResult(
            drift=path[-1].copy(),
            elapsed=span / vertical_speed,
            path=path,
        )

    def freefall(
        self,
        profile: WindProfile,
        params: JumpParameters,
        elevation: float = 0.0,
    ) -> DriftResult:
        """Drift from exit to canopy opening."""
        return self.integrate(
            profile,
            start_altitude=params.jump_altitude + elevation,
            end_altitude=params.opening_altitude + elevation,
            vertical_speed=params.freefall_speed,
            step_size=self.freefall_step,
        )

    def canopy(
        self,
        profile: WindProfile,
        params: JumpParameters,
        heading: Optional[float],
        elevation: float = 0.0,
    ) -> DriftResult:
        """Drift from canopy opening to setup altitude, gliding toward heading."""
        return self.integrate(
            profile,
            start_altitude=params.opening_altitude + elevation,
            end_altitude=params.setup_altitude + elevation,
            vertical_speed=params.canopy_descent_rate,
            horizontal_airspeed=params.canopy_horizontal_speed,
            heading=heading,
            step_size=self.canopy_step,
        )
