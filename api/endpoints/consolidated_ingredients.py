"""
Meal Planner Consolidated Ingredients Endpoints
Consolidation across meal plans and groups, store aisle organization and Instacart output
"""

from fastapi import APIRouter, Depends, HTTPException, status, Path
from typing import Dict, List
import logging

from core.dependencies import AggregationService, CurrentUserId, Storage
from core.exceptions import InputDataError, MealPlanGroupNotFoundError, MealPlanNotFoundError
from schemas.consolidation_schemas import (
    ConsolidatedIngredient,
    ConsolidationResult,
    GroceryList,
    GroupOptimizationResponse,
    InstacartFormatRequest,
    InstacartFormatResponse,
    StoreOrganizationRequest,
)
from services.cost_optimization import cost_optimizer
from services.grocery_list_service import project_grocery_list
from services.instacart_service import InstacartFormatService, get_instacart_service
from services.store_organization_service import StoreOrganizationService, get_store_organization_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Consolidated Ingredients"])


@router.get("/meal-plan/{meal_plan_id}", response_model=ConsolidationResult)
async def get_meal_plan_ingredients(
    current_user_id: CurrentUserId,
    storage: Storage,
    aggregation_service: AggregationService,
    meal_plan_id: int = Path(..., ge=1),
):
    """
    Get the consolidated ingredient list for one meal plan
    """
    try:
        return await aggregation_service.consolidate_meal_plan(meal_plan_id, current_user_id, storage)
    except MealPlanNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan not found"
        )
    except InputDataError as e:
        logger.error(f"Invalid ingredient data in meal plan {meal_plan_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )


@router.get("/group/{group_id}", response_model=ConsolidationResult)
async def get_group_ingredients(
    current_user_id: CurrentUserId,
    storage: Storage,
    aggregation_service: AggregationService,
    group_id: int = Path(..., ge=1),
):
    """
    Get the consolidated ingredient list across every meal plan in a group
    """
    try:
        return await aggregation_service.consolidate_group(group_id, current_user_id, storage)
    except MealPlanGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan group not found"
        )
    except InputDataError as e:
        logger.error(f"Invalid ingredient data in meal plan group {group_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )


@router.get("/group/{group_id}/optimization", response_model=GroupOptimizationResponse)
async def get_group_optimization(
    current_user_id: CurrentUserId,
    storage: Storage,
    aggregation_service: AggregationService,
    group_id: int = Path(..., ge=1),
):
    """
    Consolidated ingredients for a group plus shared-ingredient savings
    """
    try:
        return await cost_optimizer.optimize_group(
            group_id, current_user_id, storage, aggregation_service=aggregation_service
        )
    except MealPlanGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan group not found"
        )
    except InputDataError as e:
        logger.error(f"Invalid ingredient data in meal plan group {group_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )


@router.get("/group/{group_id}/grocery-list", response_model=GroceryList)
async def get_group_grocery_list(
    current_user_id: CurrentUserId,
    storage: Storage,
    aggregation_service: AggregationService,
    group_id: int = Path(..., ge=1),
):
    """
    Consolidated shopping list for a group, each item placed in its category aisle
    """
    try:
        consolidated = await aggregation_service.consolidate_group(group_id, current_user_id, storage)
    except MealPlanGroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meal plan group not found"
        )
    except InputDataError as e:
        logger.error(f"Invalid ingredient data in meal plan group {group_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e)
        )
    return project_grocery_list(consolidated)


@router.post("/organize-by-store", response_model=Dict[str, List[ConsolidatedIngredient]])
async def organize_by_store(
    request: StoreOrganizationRequest,
    current_user_id: CurrentUserId,
    service: StoreOrganizationService = Depends(get_store_organization_service),
):
    """
    Group ingredients by aisle for the requested store
    """
    return await service.organize_by_store(request.ingredients, request.store)


@router.post("/instacart-format", response_model=InstacartFormatResponse)
async def instacart_format(
    request: InstacartFormatRequest,
    current_user_id: CurrentUserId,
    service: InstacartFormatService = Depends(get_instacart_service),
):
    """
    Build an Instacart-ready shopping message for the ingredients
    """
    return await service.generate(request.ingredients)
