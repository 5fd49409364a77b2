"""
Meal Planner API Endpoints
All API endpoint modules
"""

from . import health, consolidated_ingredients

__all__ = [
    "health",
    "consolidated_ingredients"
]
