"""
Meal Planner Storage Access
Read interface the consolidation services need from the meal plan store,
plus an in-memory implementation used for development and tests
"""

from typing import Dict, List, Optional, Protocol

from schemas.consolidation_schemas import RawIngredientLine
from schemas.meal_planning_schemas import MealPlanGroupRecord, MealPlanRecord, MealRecord


class MealPlanStorage(Protocol):
    """Storage collaborator consumed by the ingredient consolidation services"""

    async def get_meal_plan(self, meal_plan_id: int, user_id: str) -> Optional[MealPlanRecord]:
        ...

    async def get_meals_for_plan(self, meal_plan_id: int) -> List[MealRecord]:
        ...

    async def get_recipe_ingredients(self, recipe_id: int) -> List[RawIngredientLine]:
        ...

    async def get_meal_plan_group(self, group_id: int, user_id: str) -> Optional[MealPlanGroupRecord]:
        ...

    async def get_meal_plans_by_group(self, group_id: int, user_id: str) -> List[MealPlanRecord]:
        ...


class InMemoryMealPlanStorage:
    """Dictionary-backed MealPlanStorage"""

    def __init__(self):
        self.groups: Dict[int, MealPlanGroupRecord] = {}
        self.meal_plans: Dict[int, MealPlanRecord] = {}
        self.meals: Dict[int, MealRecord] = {}
        self.recipe_ingredients: Dict[int, List[RawIngredientLine]] = {}

    def add_group(self, group: MealPlanGroupRecord) -> MealPlanGroupRecord:
        self.groups[group.id] = group
        return group

    def add_meal_plan(self, meal_plan: MealPlanRecord) -> MealPlanRecord:
        self.meal_plans[meal_plan.id] = meal_plan
        return meal_plan

    def add_meal(self, meal: MealRecord) -> MealRecord:
        self.meals[meal.id] = meal
        return meal

    def set_recipe_ingredients(self, recipe_id: int, ingredients: List[RawIngredientLine]) -> None:
        self.recipe_ingredients[recipe_id] = list(ingredients)

    async def get_meal_plan(self, meal_plan_id: int, user_id: str) -> Optional[MealPlanRecord]:
        meal_plan = self.meal_plans.get(meal_plan_id)
        if meal_plan is None or meal_plan.user_id != user_id:
            return None
        return meal_plan

    async def get_meals_for_plan(self, meal_plan_id: int) -> List[MealRecord]:
        return [meal for meal in self.meals.values() if meal.meal_plan_id == meal_plan_id]

    async def get_recipe_ingredients(self, recipe_id: int) -> List[RawIngredientLine]:
        return list(self.recipe_ingredients.get(recipe_id, []))

    async def get_meal_plan_group(self, group_id: int, user_id: str) -> Optional[MealPlanGroupRecord]:
        group = self.groups.get(group_id)
        if group is None or group.user_id != user_id:
            return None
        return group

    async def get_meal_plans_by_group(self, group_id: int, user_id: str) -> List[MealPlanRecord]:
        return [
            plan for plan in self.meal_plans.values()
            if plan.group_id == group_id and plan.user_id == user_id
        ]


# Process-wide store used by the API until a database-backed storage is configured
meal_plan_storage = InMemoryMealPlanStorage()
