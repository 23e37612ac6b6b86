"""Configuration management using Pydantic Settings."""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""
    
    # OpenAI Configuration
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    openai_temperature: Optional[float] = None
    
    # Order storage
    orders_dir: Path = Path("orders")
    
    # Agent loop
    max_cycles_per_turn: int = Field(10, ge=1)
    
    # LangSmith Configuration
    langchain_tracing_v2: bool = False
    langchain_api_key: Optional[str] = None
    langchain_project: str = "restaurant-agent"
    
    # Application Configuration
    app_name: str = "Restaurant Management AI Assistant"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
