"""
Meal Planner Store Organization Service
Groups consolidated ingredients into store aisles, AI first with a category-table fallback
"""

from typing import Dict, List, Optional, Set

from fastapi import Depends
import structlog

from core.config import settings
from core.exceptions import ExternalServiceError
from middleware.logging import log_business_event
from schemas.consolidation_schemas import AisleLayout, ConsolidatedIngredient
from services.ai_service import AIServiceClient, get_ai_service
from services.aisle_mapping import AISLE_ORDER, get_category_aisle
from services.prompt_engineering import PromptTemplates, prompt_templates, strip_code_fences

logger = structlog.get_logger()

AisleGroups = Dict[str, List[ConsolidatedIngredient]]


class StoreOrganizationService:
    """
    Organizes ingredients by store aisle.
    The AI path is best-effort and may omit items; the category fallback never does.
    """

    def __init__(
        self,
        ai_client: Optional[AIServiceClient] = None,
        templates: Optional[PromptTemplates] = None,
        ai_enabled: Optional[bool] = None
    ):
        self.ai_client = ai_client or AIServiceClient()
        self.templates = templates or prompt_templates
        self.ai_enabled = settings.AI_ENHANCEMENT_ENABLED if ai_enabled is None else ai_enabled

    async def organize_by_store(self, ingredients: List[ConsolidatedIngredient], store: str) -> AisleGroups:
        """
        Aisle name -> ingredient copies with ``aisle`` set.

        A single AI failure of any kind switches straight to the category table;
        there is no retry and no merging of the two results.
        """
        if not ingredients:
            return {}

        if self.ai_enabled:
            try:
                organized = await self._organize_with_ai(ingredients, store)
                log_business_event("store_organization", {
                    "store": store,
                    "source": "ai",
                    "ingredient_count": len(ingredients),
                    "aisle_count": len(organized),
                })
                return organized
            except Exception as e:
                logger.warning(
                    "AI store organization failed, falling back to category aisles",
                    store=store,
                    error=str(e),
                    error_type=type(e).__name__
                )

        organized = self.organize_by_category(ingredients)
        log_business_event("store_organization", {
            "store": store,
            "source": "fallback",
            "ingredient_count": len(ingredients),
            "aisle_count": len(organized),
        })
        return organized

    def organize_by_category(self, ingredients: List[ConsolidatedIngredient]) -> AisleGroups:
        """Deterministic grouping through the shared category -> aisle table"""
        buckets: AisleGroups = {aisle: [] for aisle in AISLE_ORDER}
        for ingredient in ingredients:
            aisle = get_category_aisle(ingredient.category)
            buckets[aisle].append(ingredient.model_copy(update={"aisle": aisle}, deep=True))
        return {aisle: items for aisle, items in buckets.items() if items}

    async def _organize_with_ai(self, ingredients: List[ConsolidatedIngredient], store: str) -> AisleGroups:
        prompt = self.templates.build_aisle_prompt(ingredients, store)
        response_text = await self.ai_client.complete(prompt)

        layout = AisleLayout.model_validate_json(strip_code_fences(response_text))
        if not layout.root:
            raise ExternalServiceError("AI returned an empty aisle layout")

        by_name: Dict[str, ConsolidatedIngredient] = {}
        for ingredient in ingredients:
            by_name.setdefault(ingredient.name.strip().lower(), ingredient)

        organized: AisleGroups = {}
        placed: Set[str] = set()
        unmatched = 0
        for aisle, item_names in layout.root.items():
            bucket = []
            for item_name in item_names:
                key = item_name.strip().lower()
                ingredient = by_name.get(key)
                if ingredient is None:
                    unmatched += 1
                    continue
                if key in placed:
                    continue
                placed.add(key)
                bucket.append(ingredient.model_copy(update={"aisle": aisle}, deep=True))
            if bucket:
                organized[aisle] = bucket

        if not organized:
            raise ExternalServiceError("AI aisle layout matched none of the ingredients")

        if unmatched or len(placed) < len(by_name):
            logger.info(
                "AI aisle layout was partial",
                store=store,
                unmatched_names=unmatched,
                omitted_ingredients=len(by_name) - len(placed)
            )

        return organized


def get_store_organization_service(
    ai_client: AIServiceClient = Depends(get_ai_service)
) -> StoreOrganizationService:
    return StoreOrganizationService(ai_client=ai_client)
