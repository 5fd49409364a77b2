"""
Meal Planner Meal Planning Schemas
Pydantic models for the stored meal plan entities the consolidation services read
"""

from typing import List, Optional
from datetime import date
from pydantic import BaseModel, Field
from enum import Enum


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class MealPlanStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class MealPlanGroupRecord(BaseModel):
    id: int
    user_id: str
    name: str
    description: Optional[str] = None


class MealPlanRecord(BaseModel):
    id: int
    user_id: str
    name: str
    group_id: Optional[int] = None
    target_group: str = "family"
    goals: List[str] = Field(default_factory=list)
    start_date: Optional[date] = None
    duration: int = Field(7, ge=1, le=30)
    status: MealPlanStatus = MealPlanStatus.ACTIVE


class MealRecord(BaseModel):
    id: int
    meal_plan_id: int
    recipe_id: int
    meal_type: MealType = MealType.DINNER
    servings: int = Field(4, ge=1)
