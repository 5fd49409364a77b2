"""
Pytest configuration and fixtures for the meal planner backend tests.
"""

import asyncio
import os

import pytest

# Set test environment before importing application modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "console")

from core.exceptions import ExternalServiceError
from schemas.consolidation_schemas import ConsolidatedIngredient, RawIngredientLine
from schemas.meal_planning_schemas import MealPlanGroupRecord, MealPlanRecord, MealRecord
from services.ingredient_aggregation_service import IngredientAggregationService
from services.price_estimation import FixedPriceEstimator
from services.storage import InMemoryMealPlanStorage


def run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


class FakeAIClient:
    """Stand-in for AIServiceClient that records prompts."""

    def __init__(self, response: str = None, error: Exception = None):
        self.response = response
        self.error = error
        self.prompts = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def failing_ai_client():
    return FakeAIClient(error=ExternalServiceError("AI service request failed: connection refused"))


@pytest.fixture
def aggregation_service():
    """Aggregation service with a flat, deterministic price."""
    return IngredientAggregationService(price_estimator=FixedPriceEstimator(2.0))


@pytest.fixture
def sample_ingredients():
    """Consolidated ingredients spanning several categories."""
    return [
        ConsolidatedIngredient(name="Onion", total_amount=3, unit="each", category="produce",
                               estimated_price=2.0, used_in_plans=["Adults", "Kids"]),
        ConsolidatedIngredient(name="Chicken Breast", total_amount=2, unit="lbs", category="meat",
                               estimated_price=4.5, used_in_plans=["Adults"]),
        ConsolidatedIngredient(name="Cheddar", total_amount=8, unit="oz", category="dairy",
                               estimated_price=3.0, used_in_plans=["Kids"]),
        ConsolidatedIngredient(name="Rice", total_amount=1.5, unit="cups", category="grains",
                               estimated_price=1.25, used_in_plans=["Adults", "Kids"]),
        ConsolidatedIngredient(name="Saffron", total_amount=1, unit="pinch", category="luxury",
                               estimated_price=5.0, used_in_plans=["Adults"]),
    ]


@pytest.fixture
def storage():
    """
    In-memory store with one group ("Family Week", id 1) holding two plans:
    "Adults" (Tomato Soup, Chicken Stir Fry) and "Kids" (Veggie Stew).
    """
    store = InMemoryMealPlanStorage()
    store.add_group(MealPlanGroupRecord(id=1, user_id="user-1", name="Family Week"))
    store.add_meal_plan(MealPlanRecord(id=10, user_id="user-1", name="Adults", group_id=1,
                                       target_group="adults"))
    store.add_meal_plan(MealPlanRecord(id=11, user_id="user-1", name="Kids", group_id=1,
                                       target_group="kids"))
    store.add_meal(MealRecord(id=100, meal_plan_id=10, recipe_id=1000))
    store.add_meal(MealRecord(id=101, meal_plan_id=10, recipe_id=1001))
    store.add_meal(MealRecord(id=102, meal_plan_id=11, recipe_id=1002))

    store.set_recipe_ingredients(1000, [
        RawIngredientLine(name="Onion", amount=1, unit="each", category="produce"),
        RawIngredientLine(name="Crushed Tomatoes", amount=1, unit="can (14.5 oz)", category="pantry"),
    ])
    store.set_recipe_ingredients(1001, [
        RawIngredientLine(name="Chicken Breast", amount=1.5, unit="lbs", category="meat"),
        RawIngredientLine(name="onion", amount=1, unit="each", category="produce"),
    ])
    store.set_recipe_ingredients(1002, [
        RawIngredientLine(name="onion", amount=2, unit="each", category="produce"),
        RawIngredientLine(name="Carrot", amount=3, unit="each", category="produce"),
    ])
    return store
