"""
Meal Planner Services Module
Ingredient consolidation, store organization and AI-assisted shopping output
"""

from .ai_service import AIServiceClient, get_ai_service
from .price_estimation import PriceEstimator, RandomPriceEstimator, FixedPriceEstimator
from .ingredient_aggregation_service import IngredientAggregationService, ingredient_key
from .store_organization_service import StoreOrganizationService
from .instacart_service import InstacartFormatService, render_instacart_message
from .cost_optimization import CostOptimizer, cost_optimizer
from .grocery_list_service import project_grocery_list

__all__ = [
    # AI Service
    "AIServiceClient",
    "get_ai_service",

    # Pricing
    "PriceEstimator",
    "RandomPriceEstimator",
    "FixedPriceEstimator",

    # Consolidation
    "IngredientAggregationService",
    "ingredient_key",

    # Shopping output
    "StoreOrganizationService",
    "InstacartFormatService",
    "render_instacart_message",
    "project_grocery_list",

    # Cost Optimization
    "CostOptimizer",
    "cost_optimizer"
]
