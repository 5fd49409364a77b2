"""
Meal Planner Exceptions
Error taxonomy shared by the consolidation services and the API layer
"""


class MealPlannerError(Exception):
    """Base class for all application errors"""


class InputDataError(MealPlannerError):
    """Raised when upstream ingredient data is structurally invalid"""


class ExternalServiceError(MealPlannerError):
    """Raised when the AI collaborator fails or answers with an unusable payload"""


class MealPlanNotFoundError(MealPlannerError):
    """Raised when a meal plan does not exist or belongs to another user"""

    def __init__(self, meal_plan_id: int):
        self.meal_plan_id = meal_plan_id
        super().__init__(f"Meal plan {meal_plan_id} not found")


class MealPlanGroupNotFoundError(MealPlannerError):
    """Raised when a meal plan group does not exist or belongs to another user"""

    def __init__(self, group_id: int):
        self.group_id = group_id
        super().__init__(f"Meal plan group {group_id} not found")
