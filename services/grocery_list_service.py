"""
Meal Planner Grocery List Service
Projects a consolidation result into the grocery list shape the UI stores and prints
"""

from schemas.consolidation_schemas import ConsolidationResult, GroceryList, GroceryListItem
from services.aisle_mapping import get_category_aisle


def project_grocery_list(result: ConsolidationResult) -> GroceryList:
    """One unpurchased item per consolidated ingredient, aisle taken from its category"""
    items = [
        GroceryListItem(
            name=ingredient.name,
            amount=ingredient.total_amount,
            unit=ingredient.unit,
            category=ingredient.category,
            estimated_price=round(ingredient.estimated_price, 2),
            aisle=get_category_aisle(ingredient.category),
            used_in_plans=list(ingredient.used_in_plans),
        )
        for ingredient in result.ingredients
    ]

    name = result.name.replace("Consolidated Ingredients", "Consolidated Shopping List")
    return GroceryList(name=name, total_cost=round(result.total_cost, 2), items=items)
