"""
Meal Planner Cost Optimization Service
Cross-plan ingredient sharing metrics for meal plan groups
"""

import math
from typing import List, Optional

from core.config import settings
from middleware.logging import log_business_event
from schemas.consolidation_schemas import (
    ConsolidatedIngredient,
    ConsolidationResult,
    GroupOptimizationResponse,
    OptimizationSummary,
)
from services.ingredient_aggregation_service import IngredientAggregationService
from services.storage import MealPlanStorage


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CostOptimizer:
    """
    Computes which consolidated ingredients are shared by two or more plans and
    what that sharing is worth. The per-ingredient savings figure is a business
    placeholder (SHARED_INGREDIENT_SAVINGS), not a measured estimate.
    """

    def __init__(self, savings_per_shared_ingredient: Optional[float] = None):
        if savings_per_shared_ingredient is None:
            savings_per_shared_ingredient = settings.SHARED_INGREDIENT_SAVINGS
        self.savings_per_shared_ingredient = savings_per_shared_ingredient

    def compute_optimization(self, consolidated: List[ConsolidatedIngredient]) -> OptimizationSummary:
        shared_ingredients = [
            ingredient.name for ingredient in consolidated
            if len(ingredient.used_in_plans) > 1
        ]

        total = len(consolidated)
        overlap_percentage = len(shared_ingredients) / total * 100 if total else 0.0

        return OptimizationSummary(
            shared_ingredients=shared_ingredients,
            total_savings=len(shared_ingredients) * self.savings_per_shared_ingredient,
            waste_reduction_note=(
                f"{round_half_up(overlap_percentage)}% waste reduction through ingredient sharing"
            ),
            overlap_percentage=overlap_percentage,
        )

    async def optimize_group(
        self,
        group_id: int,
        user_id: str,
        storage: MealPlanStorage,
        aggregation_service: Optional[IngredientAggregationService] = None
    ) -> GroupOptimizationResponse:
        """Consolidate a meal plan group and attach its sharing metrics"""
        aggregation_service = aggregation_service or IngredientAggregationService()
        consolidated: ConsolidationResult = await aggregation_service.consolidate_group(
            group_id, user_id, storage
        )
        optimization = self.compute_optimization(consolidated.ingredients)

        log_business_event("group_optimization", {
            "group_id": group_id,
            "shared_ingredients": len(optimization.shared_ingredients),
            "total_savings": optimization.total_savings,
            "overlap_percentage": round(optimization.overlap_percentage, 1),
        })

        return GroupOptimizationResponse(consolidated=consolidated, optimization=optimization)


cost_optimizer = CostOptimizer()
