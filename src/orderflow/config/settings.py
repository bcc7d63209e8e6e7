"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with .env file support.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    environment: str = "development"

    # Key-value store (Redis)
    redis_host: Optional[str] = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None

    # Tables (key prefixes in the store)
    orders_table: Optional[str] = "shopify_orders"
    products_table: Optional[str] = "shopify_inkhub_get_products"

    # Order listing cache
    order_cache_ttl_seconds: int = 300

    # GlitchTip Error Monitoring
    glitchtip_dsn: Optional[str] = None

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Create a global settings instance
settings = Settings()
