"""
Meal Planner Core Module
Central configuration and error types
"""

from .config import settings, get_settings
from .exceptions import (
    MealPlannerError,
    InputDataError,
    ExternalServiceError,
    MealPlanNotFoundError,
    MealPlanGroupNotFoundError,
)

__all__ = [
    "settings",
    "get_settings",
    "MealPlannerError",
    "InputDataError",
    "ExternalServiceError",
    "MealPlanNotFoundError",
    "MealPlanGroupNotFoundError",
]
