"""
Application Configuration

Load settings from environment variables with validation.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


# Values shipped in sample configs that mean "no key yet"
PLACEHOLDER_API_KEYS = {"YOUR_TMDB_API_KEY", "YOUR_API_KEY_HERE"}


class Settings(BaseSettings):
    """Application settings from environment variables."""
    
    # Environment
    environment: str = "development"
    debug: bool = True
    
    # TMDB catalog
    tmdb_api_key: Optional[str] = None
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str = "https://image.tmdb.org/t/p"
    tmdb_language: str = "en-US"
    
    # Ollama chat assistant (local)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    ollama_timeout_seconds: float = 60.0  # Local models answer slower than TMDB
    ollama_temperature: float = 0.8
    ollama_num_predict: int = 500
    
    # On-device key/value store (profile + watched ledger)
    storage_path: str = "~/.cineflow/store.json"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def is_tmdb_configured(self) -> bool:
        """True once a real TMDB key is set."""
        key = (self.tmdb_api_key or "").strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
