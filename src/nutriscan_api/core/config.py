"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationParams(BaseModel):
    """Sampling parameters sent as the provider's generationConfig."""

    temperature: float = Field(ge=0.0, le=2.0)
    top_k: int = Field(40, ge=1)
    top_p: float = Field(0.95, gt=0.0, le=1.0)
    max_output_tokens: int = Field(ge=1)
    candidate_count: int = Field(1, ge=1)

    def to_payload(self) -> dict:
        """Render in the provider's camelCase wire format."""
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
            "candidateCount": self.candidate_count,
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "nutriscan_db"
    image_bucket: str = "scan_images"

    # Gemini provider
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    # Tried in order; the first usable answer wins
    gemini_models: list[str] = Field(
        default_factory=lambda: [
            "gemini-2.5-flash",
            "gemini-2.0-flash",
            "gemini-2.0-flash-001",
            "gemini-2.0-flash-exp",
        ]
    )
    gemini_connect_timeout: float = 30.0
    gemini_request_timeout: float = 120.0
    safety_threshold: str = "BLOCK_NONE"

    # Generation parameters per mode
    analysis_generation: GenerationParams = GenerationParams(
        temperature=0.3, max_output_tokens=8192
    )
    chat_generation: GenerationParams = GenerationParams(
        temperature=0.7, max_output_tokens=4096
    )

    # Conversation
    chat_history_window: int = Field(10, ge=0)

    # Images sent to the model
    image_max_edge: int = 1024
    image_jpeg_quality: int = Field(80, ge=1, le=95)

    # App
    debug: bool = False
    app_name: str = "NutriScan API"
    api_version: str = "1.0.0"

    @property
    def is_llm_configured(self) -> bool:
        """Check if the provider credential and model list are set."""
        return bool(self.gemini_api_key) and bool(self.gemini_models)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
