"""
Meal Planner Prompt Engineering
Prompt templates for the AI-assisted shopping features
"""

import re
from typing import List

from schemas.consolidation_schemas import ConsolidatedIngredient

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def format_amount(amount: float) -> str:
    """Render an amount without trailing zeros: 3.0 -> "3", 0.125 -> "0.125" """
    amount = float(amount)
    if amount == int(amount):
        return str(int(amount))
    # Ten significant digits hide float sum noise (0.1 + 0.2) but keep small amounts
    return f"{amount:.10g}"


def format_quantity(ingredient: ConsolidatedIngredient) -> str:
    """Amount followed by unit, omitting an empty unit"""
    return " ".join(part for part in (format_amount(ingredient.total_amount), ingredient.unit) if part)


def strip_code_fences(content: str) -> str:
    """Return the body of a ```json fenced block, or the content unchanged"""
    match = _FENCE_PATTERN.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()


class PromptTemplates:
    """Prompt builders for store organization and Instacart formatting"""

    aisle_example = "\n".join([
        "{",
        '  "Produce": ["tomatoes", "onions", "bell peppers"],',
        '  "Dairy": ["milk", "cheese", "yogurt"],',
        '  "Meat & Seafood": ["chicken breast", "salmon"],',
        '  "Pantry/Dry Goods": ["pasta", "rice", "olive oil"],',
        '  "Frozen": ["frozen vegetables"],',
        '  "Bakery": ["bread"]',
        "}",
    ])

    def build_aisle_prompt(self, ingredients: List[ConsolidatedIngredient], store: str) -> str:
        items = "\n".join(
            f"{item.name} ({format_quantity(item)})"
            for item in ingredients
        )
        return "\n".join([
            f"Organize these grocery items by aisle for {store}:",
            "",
            items,
            "",
            "Return a JSON object with aisles as keys and arrays of ingredient names as values.",
            f"Use typical {store} store layout. Group related items logically.",
            "Use the ingredient names exactly as listed above.",
            "",
            "Example format:",
            self.aisle_example,
            "",
            "Only return the JSON object, no other text.",
        ])

    def build_instacart_prompt(self, ingredients: List[ConsolidatedIngredient]) -> str:
        items = "\n".join(
            f"{item.name}: {format_quantity(item)}"
            for item in ingredients
        )
        return "\n".join([
            "You are an expert grocery shopping assistant. Convert this cooking ingredient "
            "list into grocery store purchasing format for Instacart.",
            "",
            "COOKING INGREDIENTS TO CONVERT:",
            items,
            "",
            "CONVERSION RULES:",
            "1. Convert cooking measurements to standard grocery package sizes",
            "2. Round up to ensure enough quantity",
            "3. Use grocery store language, not cooking measurements",
            "",
            "Return in this exact format:",
            '"Please add these items to my Instacart cart:',
            "- [grocery quantity/package] [specific item name]",
            "- [grocery quantity/package] [specific item name]",
            "",
            "If any items are unavailable, please suggest similar alternatives.",
            'Prefer organic options when available."',
            "",
            "Make each item specific and purchasable from a grocery store.",
        ])


prompt_templates = PromptTemplates()
