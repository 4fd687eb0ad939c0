"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from backend.services.calculation_service import CalculationService
from backend.services.wind_service import WindService


@lru_cache()
def get_calculation_service() -> CalculationService:
    """Get cached calculation service instance."""
    return CalculationService()


def get_wind_service() -> WindService:
    """Get wind service instance."""
    return WindService()
