"""
Configuration settings for Centroid Router.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Centroid Router"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    
    # === Embedding Provider ===
    EMBEDDING_BACKEND: Literal["openai", "ollama"] = "openai"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    EMBEDDING_MODEL: str = "text-embedding-3-small"  # 1536-dim
    EMBEDDING_DIMENSIONS: Optional[int] = None  # Only for models that support shortening
    OLLAMA_BASE_URL: str = "http://ollama:11434"
    OLLAMA_EMBEDDING_MODEL: str = "nomic-embed-text"
    EMBEDDING_TIMEOUT: int = 30  # seconds
    EMBEDDING_MAX_ATTEMPTS: int = Field(default=1, ge=1)  # 1 = fail on first error
    EMBEDDING_BATCH_SIZE: int = Field(default=512, ge=1)  # Texts per provider request
    
    # === Classification ===
    CLASSIFICATION_THRESHOLD: float = Field(default=0.4, ge=-1.0, le=1.0)  # below => "unclassified"
    CACHE_CENTROIDS: bool = False  # Reload the table on every request when False
    
    # === Centroid Storage ===
    CENTROID_STORE_BACKEND: Literal["file", "redis"] = "file"
    CENTROIDS_PATH: str = "centroids.json"
    TRAINING_DATA_PATH: str = "emails.json"
    CENTROIDS_REDIS_KEY: str = "centroid_router:centroids"
    
    # === Redis & Celery ===
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20
    CELERY_BROKER_URL: str = "redis://redis:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://redis:6379/1"
    CELERY_TASK_TIME_LIMIT: int = 600  # seconds, a full rebuild embeds every example
    CELERY_WORKER_CONCURRENCY: int = 1  # Rebuilds must not run concurrently
    
    # === Web ===
    STATIC_DIR: str = "public"
    PROMETHEUS_ENABLED: bool = True
    
    # === Feature Flags ===
    ENABLE_ASYNC_API: bool = True  # Enable Celery-based rebuild endpoints


# Global settings instance
settings = Settings()
