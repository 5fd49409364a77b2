"""
Meal Planner Ingredient Aggregation Service
Merges recipe ingredient lines across meal plans and groups into one priced shopping set
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from core.exceptions import InputDataError, MealPlanGroupNotFoundError, MealPlanNotFoundError
from middleware.logging import log_business_event
from schemas.consolidation_schemas import (
    ConsolidatedIngredient,
    ConsolidationMetadata,
    ConsolidationResult,
    IngredientSource,
    RawIngredientLine,
)
from schemas.meal_planning_schemas import MealPlanRecord
from services.price_estimation import PriceEstimator, get_price_estimator
from services.storage import MealPlanStorage

logger = logging.getLogger(__name__)


def ingredient_key(name: str, unit: Optional[str] = None) -> str:
    """
    Dedup key for an ingredient name, optionally scoped by unit.
    No stemming or plural folding: "Tomato" and "tomatoes" stay distinct.
    """
    key = name.strip().lower()
    if unit is not None:
        key = f"{key}|{unit.strip().lower()}"
    return key


def display_name(name: str) -> str:
    """First-seen casing with the first letter capitalized"""
    name = name.strip()
    return name[:1].upper() + name[1:]


class IngredientAggregationService:
    """Service for consolidating ingredients from recipes, meal plans and meal plan groups"""

    def __init__(self, price_estimator: Optional[PriceEstimator] = None, key_by_unit: bool = False):
        self.price_estimator = price_estimator or get_price_estimator()
        self.key_by_unit = key_by_unit

    def consolidate(self, sources: Iterable[Union[IngredientSource, Dict[str, Any]]]) -> List[ConsolidatedIngredient]:
        """
        Merge every source's ingredient lines into a de-duplicated list.

        Lines with the same key sum their amounts into the first-seen entry, which
        keeps its unit even when later lines use another one. Plan names are
        recorded once each, in first-seen order. Output order is first-seen order.

        Raises:
            InputDataError: if a line has no usable name
        """
        consolidated: Dict[str, ConsolidatedIngredient] = {}

        for source in sources:
            if not isinstance(source, IngredientSource):
                source = self._coerce(IngredientSource, source)

            for line in source.ingredients:
                if not isinstance(line, RawIngredientLine):
                    line = self._coerce(RawIngredientLine, line)
                if line.name is None or not line.name.strip():
                    raise InputDataError(f"Ingredient line from '{source.plan_name}' has no name")

                key = ingredient_key(line.name, line.unit if self.key_by_unit else None)
                existing = consolidated.get(key)

                if existing is None:
                    ingredient = ConsolidatedIngredient(
                        name=display_name(line.name),
                        total_amount=line.amount,
                        unit=line.unit,
                        category=line.category or "other",
                        used_in_plans=[source.plan_name],
                    )
                    ingredient.estimated_price = self.price_estimator.estimate_price(ingredient)
                    consolidated[key] = ingredient
                    continue

                if line.unit and existing.unit and line.unit.lower() != existing.unit.lower():
                    logger.debug(
                        f"Summing '{line.name}' across units without conversion: "
                        f"{existing.unit} + {line.unit}"
                    )
                existing.total_amount += line.amount
                if source.plan_name not in existing.used_in_plans:
                    existing.used_in_plans.append(source.plan_name)

        return list(consolidated.values())

    def build_result(
        self,
        result_id: str,
        name: str,
        ingredients: List[ConsolidatedIngredient],
        meal_plan_count: int,
        recipe_count: int
    ) -> ConsolidationResult:
        """Wrap consolidated ingredients in the response envelope"""
        return ConsolidationResult(
            id=result_id,
            name=name,
            total_cost=sum(ing.estimated_price for ing in ingredients),
            ingredients=ingredients,
            metadata=ConsolidationMetadata(
                meal_plan_count=meal_plan_count,
                recipe_count=recipe_count,
                total_items=len(ingredients),
            ),
        )

    async def consolidate_meal_plan(
        self,
        meal_plan_id: int,
        user_id: str,
        storage: MealPlanStorage
    ) -> ConsolidationResult:
        """Consolidated ingredients for every recipe of a single meal plan"""
        meal_plan = await storage.get_meal_plan(meal_plan_id, user_id)
        if meal_plan is None:
            raise MealPlanNotFoundError(meal_plan_id)

        sources, recipe_count = await self._collect_plan_sources(meal_plan, storage)
        ingredients = self.consolidate(sources)

        logger.info(
            f"Consolidated {len(ingredients)} ingredients from {recipe_count} recipes "
            f"for meal plan {meal_plan_id}"
        )
        log_business_event("ingredients_consolidated", {
            "scope": "meal_plan",
            "meal_plan_id": meal_plan_id,
            "recipe_count": recipe_count,
            "total_items": len(ingredients),
        })

        return self.build_result(
            f"meal-plan-{meal_plan_id}",
            f"{meal_plan.name} - Consolidated Ingredients",
            ingredients,
            meal_plan_count=1,
            recipe_count=recipe_count,
        )

    async def consolidate_group(
        self,
        group_id: int,
        user_id: str,
        storage: MealPlanStorage
    ) -> ConsolidationResult:
        """Consolidated ingredients across every meal plan in a meal plan group"""
        group = await storage.get_meal_plan_group(group_id, user_id)
        if group is None:
            raise MealPlanGroupNotFoundError(group_id)

        meal_plans = await storage.get_meal_plans_by_group(group_id, user_id)

        sources: List[IngredientSource] = []
        total_recipe_count = 0
        for meal_plan in meal_plans:
            plan_sources, recipe_count = await self._collect_plan_sources(meal_plan, storage)
            sources.extend(plan_sources)
            total_recipe_count += recipe_count

        ingredients = self.consolidate(sources)

        logger.info(
            f"Consolidated {len(ingredients)} ingredients from {len(meal_plans)} meal plans "
            f"for group {group_id}"
        )
        log_business_event("ingredients_consolidated", {
            "scope": "group",
            "group_id": group_id,
            "meal_plan_count": len(meal_plans),
            "recipe_count": total_recipe_count,
            "total_items": len(ingredients),
        })

        return self.build_result(
            f"group-{group_id}",
            f"{group.name} - Consolidated Ingredients",
            ingredients,
            meal_plan_count=len(meal_plans),
            recipe_count=total_recipe_count,
        )

    async def _collect_plan_sources(self, meal_plan: MealPlanRecord, storage: MealPlanStorage):
        """One source per meal, all tagged with the plan name"""
        meals = await storage.get_meals_for_plan(meal_plan.id)
        sources = []
        for meal in meals:
            ingredients = await storage.get_recipe_ingredients(meal.recipe_id)
            sources.append(IngredientSource(plan_name=meal_plan.name, ingredients=ingredients))
        return sources, len(meals)

    @staticmethod
    def _coerce(model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise InputDataError(f"Invalid ingredient data: {e}") from e
