"""
Meal Planner Aisle Mapping
Single category -> store aisle table shared by store organization and grocery lists
"""

from typing import Dict, Tuple

PRODUCE = "Produce"
MEAT_SEAFOOD = "Meat & Seafood"
DAIRY = "Dairy"
PANTRY = "Pantry/Dry Goods"
FROZEN = "Frozen"
BAKERY = "Bakery"
OTHER = "Other"

# Declaration order is the aisle order used for fallback output
AISLE_ORDER: Tuple[str, ...] = (PRODUCE, MEAT_SEAFOOD, DAIRY, PANTRY, FROZEN, BAKERY, OTHER)

CATEGORY_AISLES: Dict[str, str] = {
    "produce": PRODUCE,
    "vegetables": PRODUCE,
    "fruits": PRODUCE,
    "meat": MEAT_SEAFOOD,
    "seafood": MEAT_SEAFOOD,
    "poultry": MEAT_SEAFOOD,
    "dairy": DAIRY,
    "cheese": DAIRY,
    "milk": DAIRY,
    "pantry": PANTRY,
    "grains": PANTRY,
    "pasta": PANTRY,
    "rice": PANTRY,
    "spices": PANTRY,
    "condiments": PANTRY,
    "frozen": FROZEN,
    "bakery": BAKERY,
    "bread": BAKERY,
}


def get_category_aisle(category: str) -> str:
    """Map an ingredient category to its aisle, defaulting to Other"""
    if not category:
        return OTHER
    return CATEGORY_AISLES.get(category.strip().lower(), OTHER)
