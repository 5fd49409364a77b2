"""
Meal Planner Configuration Settings
Manages all application configuration with environment-based overrides
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "MealPlanner"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    VERSION: str = "1.0.0"

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )

    # AI Microservice Configuration
    AI_SERVICE_URL: str = Field(default="http://localhost:8001")
    AI_SERVICE_API_KEY: Optional[str] = Field(default=None)
    AI_MODEL: str = Field(default="gpt-4o")
    AI_TEMPERATURE: float = Field(default=0.3, ge=0.0, le=2.0)
    AI_TIMEOUT: int = Field(default=30)
    AI_ENHANCEMENT_ENABLED: bool = Field(default=True)

    # Pricing placeholders until a real grocery pricing API is wired in
    PRICE_ESTIMATE_MIN: float = Field(default=1.0, gt=0)
    PRICE_ESTIMATE_SPREAD: float = Field(default=5.0, ge=0)
    SHARED_INGREDIENT_SAVINGS: float = Field(default=2.5, ge=0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


# Environment-specific configurations
if settings.is_production:
    settings.DEBUG = False
    settings.LOG_LEVEL = "WARNING"

elif settings.is_development:
    settings.DEBUG = True
    settings.LOG_LEVEL = "DEBUG"
