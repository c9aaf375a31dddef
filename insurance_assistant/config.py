"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "Health Insurance Assistant"
    log_level: str = Field(default="INFO", description="Logging level")
    allowed_origins: str = Field(default="*", description="Allowed CORS origins (comma-separated)")
    catalog_path: Optional[Path] = Field(default=None, description="Plan catalog JSON; bundled catalog when unset")

    # LLM gateway (OpenAI-compatible chat completions)
    llm_api_key: Optional[str] = Field(default=None, description="Bearer key for the chat gateway")
    llm_base_url: str = Field(default="https://ai.gateway.lovable.dev/v1")
    llm_model: str = Field(default="google/gemini-2.5-flash")
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1000, ge=1)
    llm_timeout_seconds: float = Field(default=30.0, gt=0)

    # Google Custom Search (optional context for chat)
    google_api_key: Optional[str] = None
    google_search_engine_id: Optional[str] = None
    search_url: str = Field(default="https://www.googleapis.com/customsearch/v1")
    search_results: int = Field(default=3, ge=1, le=10)

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def search_enabled(self) -> bool:
        return bool(self.google_api_key and self.google_search_engine_id)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
