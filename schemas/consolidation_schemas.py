"""
Meal Planner Consolidation Schemas
Pydantic models for ingredient consolidation, store organization and shopping output
"""

import math
from typing import List, Optional, Dict, Any

from pydantic import BaseModel, Field, RootModel, field_validator


def coerce_amount(value: Any) -> float:
    """Parse an ingredient amount, treating anything unusable as 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return 0.0
    return amount


class RawIngredientLine(BaseModel):
    """One ingredient as attached to one recipe"""
    name: Optional[str] = None
    amount: float = 0.0
    unit: str = ""
    category: str = "other"

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)

    @field_validator("unit", mode="before")
    @classmethod
    def default_unit(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if v is None or not str(v).strip():
            return "other"
        return str(v).strip().lower()


class ConsolidatedIngredient(BaseModel):
    """Merged, de-duplicated ingredient across recipes and plans"""
    name: str
    total_amount: float = 0.0
    unit: str = ""
    category: str = "other"
    estimated_price: float = 0.0
    used_in_plans: List[str] = Field(default_factory=list)
    aisle: Optional[str] = None


class ConsolidationMetadata(BaseModel):
    meal_plan_count: int = 0
    recipe_count: int = 0
    total_items: int = 0


class ConsolidationResult(BaseModel):
    id: str
    name: str
    total_cost: float = 0.0
    ingredients: List[ConsolidatedIngredient] = Field(default_factory=list)
    metadata: ConsolidationMetadata = Field(default_factory=ConsolidationMetadata)


class IngredientSource(BaseModel):
    """Ingredient lines contributed by one plan (or recipe) to a consolidation pass"""
    plan_name: str
    ingredients: List[RawIngredientLine] = Field(default_factory=list)


class StoreOrganizationRequest(BaseModel):
    ingredients: List[ConsolidatedIngredient]
    store: str = Field(..., min_length=1, max_length=200)


class InstacartFormatRequest(BaseModel):
    ingredients: List[ConsolidatedIngredient]


class InstacartFormatResponse(BaseModel):
    format: str
    used_ai: bool = False


class OptimizationSummary(BaseModel):
    shared_ingredients: List[str] = Field(default_factory=list)
    total_savings: float = 0.0
    waste_reduction_note: str
    overlap_percentage: float = Field(0.0, ge=0.0, le=100.0)


class GroupOptimizationResponse(BaseModel):
    consolidated: ConsolidationResult
    optimization: OptimizationSummary


class GroceryListItem(BaseModel):
    name: str
    amount: float
    unit: str
    category: str
    estimated_price: float
    aisle: str
    used_in_plans: List[str] = Field(default_factory=list)
    purchased: bool = False


class GroceryList(BaseModel):
    name: str
    total_cost: float = 0.0
    items: List[GroceryListItem] = Field(default_factory=list)


class AisleLayout(RootModel[Dict[str, List[str]]]):
    """Aisle name -> ingredient names, as returned by the AI store organizer"""
