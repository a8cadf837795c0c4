"""Configuration management for the meal planner."""

from pydantic_settings import BaseSettings
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str
    supabase_key: str

    # Recipe image extraction
    ai_provider: Literal["gemini", "ollama"] = "gemini"
    extraction_timeout: float = 60.0  # seconds

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"

    # Ollama (needs a vision-capable model)
    ollama_host: str = "http://localhost:11434"
    ollama_vision_model: str = "llava"

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
