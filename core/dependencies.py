"""
Meal Planner Core Dependencies
FastAPI dependencies for the caller identity and the consolidation services
"""

from fastapi import Depends, Header, HTTPException, status
from typing import Optional, Annotated

from services.ingredient_aggregation_service import IngredientAggregationService
from services.storage import MealPlanStorage, meal_plan_storage


async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header()] = None
) -> str:
    """
    Identify the caller from the X-User-ID header set by the auth gateway

    Raises:
        HTTPException: If the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return x_user_id.strip()


def get_storage() -> MealPlanStorage:
    return meal_plan_storage


def get_aggregation_service() -> IngredientAggregationService:
    return IngredientAggregationService()


# Type aliases for common dependencies
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
Storage = Annotated[MealPlanStorage, Depends(get_storage)]
AggregationService = Annotated[IngredientAggregationService, Depends(get_aggregation_service)]
