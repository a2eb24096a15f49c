import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///./whisk.db", alias="DATABASE_URL")
    auth_secret_key: str = Field("change-me", alias="AUTH_SECRET_KEY")
    auth_algorithm: str = Field("HS256", alias="AUTH_ALGORITHM")
    auth_audience: Optional[str] = Field(None, alias="AUTH_AUDIENCE")
    llm_base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta/openai", alias="LLM_BASE_URL"
    )
    llm_api_key: Optional[str] = Field(None, alias="LLM_API_KEY")
    llm_model_name: str = Field("gemini-2.5-flash", alias="LLM_MODEL_NAME")
    llm_timeout_seconds: float = Field(60.0, alias="LLM_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_timeout_seconds: float = Field(15.0, alias="SCRAPER_TIMEOUT_SECONDS")
    scraper_min_html_length: int = Field(1000, alias="SCRAPER_MIN_HTML_LENGTH")
    scraper_block_markers: List[str] = Field(
        default_factory=lambda: [
            "Sucuri Website Firewall",
            "Access Denied",
            "Attention Required! | Cloudflare",
        ],
        alias="SCRAPER_BLOCK_MARKERS",
    )
    ai_content_char_budget: int = Field(12000, alias="AI_CONTENT_CHAR_BUDGET")
    ai_min_content_length: int = Field(100, alias="AI_MIN_CONTENT_LENGTH")
    ai_default_category: List[str] = Field(
        default_factory=lambda: ["Main Course"], alias="AI_DEFAULT_CATEGORY"
    )
    ai_default_cuisine: List[str] = Field(
        default_factory=lambda: ["Indian"], alias="AI_DEFAULT_CUISINE"
    )
    ai_default_yield: str = Field("4 servings", alias="AI_DEFAULT_YIELD")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
