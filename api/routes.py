"""
Meal Planner API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter

from api.endpoints import health, consolidated_ingredients

# Create main API router
api_router = APIRouter()

api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

api_router.include_router(
    consolidated_ingredients.router,
    prefix="/consolidated-ingredients",
    tags=["consolidated-ingredients"]
)
