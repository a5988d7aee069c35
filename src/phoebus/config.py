"""
Configuration management for Phoebus
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Contract
    contract_schema_path: str | None = None  # defaults to the bundled schema.graphql

    # Fixture data served by the demo resolvers
    fixtures_path: str | None = None

    # Execution
    enable_introspection: bool = True
    max_query_depth: int | None = None

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "PHOEBUS_"
        case_sensitive = False


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        contract_schema_path=settings.contract_schema_path,
        fixtures_path=settings.fixtures_path,
        environment=settings.environment,
    )
