"""
Meal Planner AI Service Client
Calls the AI microservice for text completions used by the shopping features
"""

from typing import Optional
import structlog
import httpx

from core.config import settings
from core.exceptions import ExternalServiceError

logger = structlog.get_logger()


class AIServiceClient:
    """Client for communicating with the AI microservice"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.AI_SERVICE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.AI_SERVICE_API_KEY
        self.model = model or settings.AI_MODEL
        self.temperature = settings.AI_TEMPERATURE if temperature is None else temperature
        self.timeout = timeout or settings.AI_TIMEOUT
        self.transport = transport

    async def complete(self, prompt: str) -> str:
        """
        Send a single prompt and return the completion text.

        Raises:
            ExternalServiceError: on missing configuration, transport failure,
                error status, malformed body or an empty completion
        """
        if not self.base_url:
            raise ExternalServiceError("AI service URL is not configured")

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/api/ai/complete",
                    json={
                        "prompt": prompt,
                        "model": self.model,
                        "temperature": self.temperature
                    },
                    headers=headers
                )
                response.raise_for_status()
                result = response.json()

        except httpx.RequestError as e:
            logger.error("AI service request failed", error=str(e))
            raise ExternalServiceError(f"AI service request failed: {str(e)}") from e
        except httpx.HTTPStatusError as e:
            logger.error("AI service returned error", status=e.response.status_code)
            raise ExternalServiceError(f"AI service error {e.response.status_code}: {e.response.text}") from e
        except ValueError as e:
            logger.error("AI service returned a non-JSON body", error=str(e))
            raise ExternalServiceError("AI service returned a non-JSON body") from e

        text = result.get("text") if isinstance(result, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise ExternalServiceError("No response from AI")

        return text.strip()


def get_ai_service() -> AIServiceClient:
    """Factory used as a FastAPI dependency"""
    return AIServiceClient()
