"""Configuration settings for the application."""
from functools import lru_cache
from typing import Literal, Optional, Set

from pydantic_settings import BaseSettings


LLM_PROVIDER_BASE_URLS = {
    "openai": None,
    "deepseek": "https://api.deepseek.com/v1",
    "ollama": "http://localhost:11434/v1",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (required)
    database_url: str
    database_auto_create: bool = True

    # JWT authentication (required secret)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60 * 24
    # Comma-separated emails that receive the admin role on registration
    admin_emails: str = ""

    # Google Places API (required)
    google_maps_api_key: str
    places_api_version: Literal["new", "legacy"] = "new"
    google_places_timeout: float = 20.0

    # Content generation provider
    openai_api_key: str
    deepseek_api_key: Optional[str] = None
    llm_provider: Literal["openai", "deepseek", "ollama"] = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_base_url: Optional[str] = None
    llm_timeout: float = 60.0

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_reload: bool = False

    # CORS Configuration
    frontend_url: str = "http://localhost:3000"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def llm_api_key(self) -> str:
        """API key for the configured generation provider."""
        if self.llm_provider == "deepseek":
            return self.deepseek_api_key or self.openai_api_key
        if self.llm_provider == "ollama":
            # Ollama ignores the key but the OpenAI SDK insists on one
            return "ollama"
        return self.openai_api_key

    def admin_email_set(self) -> Set[str]:
        return {email.strip().lower() for email in self.admin_emails.split(",") if email.strip()}

    def resolved_llm_base_url(self) -> Optional[str]:
        return self.llm_base_url or LLM_PROVIDER_BASE_URLS.get(self.llm_provider)


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once; missing required values fail here."""
    return Settings()
