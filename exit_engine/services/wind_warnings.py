"""Service for classifying ground wind against jumper wind limits."""
from typing import Dict, Iterable, List

from exit_engine.config import GROUND_WIND_MAX_AGL, SPORT_WIND_LIMIT, STUDENT_WIND_LIMIT
from exit_engine.exceptions import InvalidParameterError
from exit_engine.models.wind import WindSample

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
DEFAULT = "default"

LEVEL_LABELS = {
    ERROR: "High",
    WARNING: "Moderate",
    SUCCESS: "OK",
    DEFAULT: "-",
}


class WindWarningService:
    """Service for ground wind warnings.

    Only samples below the ground wind height are classified; higher samples
    get the "default" level. Gusts count when they exceed the mean speed.
    """

    def __init__(
        self,
        student_limit: float = STUDENT_WIND_LIMIT,
        sport_limit: float = SPORT_WIND_LIMIT,
        ground_height: float = GROUND_WIND_MAX_AGL,
    ):
        if not 0 < student_limit <= sport_limit:
            raise InvalidParameterError(
                f"Wind limits must satisfy 0 < student <= sport, "
                f"got {student_limit} and {sport_limit}",
                parameter="student_limit",
            )
        self.student_limit = student_limit
        self.sport_limit = sport_limit
        self.ground_height = ground_height

    def level(self, sample: WindSample, elevation: float = 0.0) -> str:
        """Warning level for a single sample (altitude AMSL)."""
        if sample.altitude - elevation >= self.ground_height:
            return DEFAULT

        max_speed = max(sample.speed, sample.gust_speed or 0.0)
        if max_speed >= self.sport_limit:
            return ERROR
        if max_speed >= self.student_limit:
            return WARNING
        return SUCCESS

    def classify(self, samples: Iterable[WindSample], elevation: float = 0.0) -> List[Dict]:
        """Warning level and label for every sample."""
        results = []
        for sample in samples:
            level = self.level(sample, elevation)
            results.append({
                "altitude": sample.altitude,
                "speed": sample.speed,
                "gust_speed": sample.gust_speed,
                "level": level,
                "label": LEVEL_LABELS[level],
            })
        return results

    def summarize(self, samples: Iterable[WindSample], elevation: float = 0.0) -> Dict[str, bool]:
        """Whether any ground sample reaches the sport or student limit."""
        levels = [self.level(s, elevation) for s in samples]
        return {
            "has_high": ERROR in levels,
            "has_moderate": ERROR in levels or WARNING in levels,
        }
