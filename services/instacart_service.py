"""
Meal Planner Instacart Formatting Service
Turns a consolidated ingredient list into an Instacart shopping message
"""

from typing import List, Optional

from fastapi import Depends
import structlog

from core.config import settings
from core.exceptions import ExternalServiceError
from middleware.logging import log_business_event
from schemas.consolidation_schemas import ConsolidatedIngredient, InstacartFormatResponse
from services.ai_service import AIServiceClient, get_ai_service
from services.prompt_engineering import PromptTemplates, format_quantity, prompt_templates

logger = structlog.get_logger()

INSTACART_HEADER = "Please add these items to my Instacart cart:"
INSTACART_TRAILER = (
    "If any items are unavailable, please suggest similar alternatives.",
    "Prefer organic options when available.",
)


def render_instacart_message(ingredients: List[ConsolidatedIngredient]) -> str:
    """Deterministic message: one "- {amount} {unit} {name}" line per ingredient"""
    lines = [f"- {format_quantity(item)} {item.name}" for item in ingredients]
    return "\n".join([INSTACART_HEADER, *lines, "", *INSTACART_TRAILER])


class InstacartFormatService:
    """Builds the Instacart message through the AI service, falling back to the local template"""

    def __init__(
        self,
        ai_client: Optional[AIServiceClient] = None,
        templates: Optional[PromptTemplates] = None,
        ai_enabled: Optional[bool] = None
    ):
        self.ai_client = ai_client or AIServiceClient()
        self.templates = templates or prompt_templates
        self.ai_enabled = settings.AI_ENHANCEMENT_ENABLED if ai_enabled is None else ai_enabled

    async def generate(self, ingredients: List[ConsolidatedIngredient]) -> InstacartFormatResponse:
        if ingredients and self.ai_enabled:
            try:
                text = await self._format_with_ai(ingredients)
                log_business_event("instacart_format", {
                    "source": "ai",
                    "ingredient_count": len(ingredients),
                })
                return InstacartFormatResponse(format=text, used_ai=True)
            except Exception as e:
                logger.warning(
                    "AI Instacart formatting failed, using local template",
                    error=str(e),
                    error_type=type(e).__name__
                )

        log_business_event("instacart_format", {
            "source": "fallback",
            "ingredient_count": len(ingredients),
        })
        return InstacartFormatResponse(format=render_instacart_message(ingredients), used_ai=False)

    async def format_for_instacart(self, ingredients: List[ConsolidatedIngredient]) -> str:
        response = await self.generate(ingredients)
        return response.format

    async def _format_with_ai(self, ingredients: List[ConsolidatedIngredient]) -> str:
        prompt = self.templates.build_instacart_prompt(ingredients)
        text = (await self.ai_client.complete(prompt)).strip()

        # Echoed template quotes
        if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
            text = text[1:-1].strip()
        if not text:
            raise ExternalServiceError("AI returned an empty Instacart message")
        return text


def get_instacart_service(
    ai_client: AIServiceClient = Depends(get_ai_service)
) -> InstacartFormatService:
    return InstacartFormatService(ai_client=ai_client)
