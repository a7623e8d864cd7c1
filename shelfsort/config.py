from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SHELFSORT_")

    app_name: str = "ShelfSort"
    debug: bool = False

    log_level: str = "INFO"

    # Log every pipeline stage even when the `debug` query parameter is off
    pipeline_debug_override: bool = False


settings = Settings()


# =============================================================================
# REQUEST LIMITS
# =============================================================================

# Largest collection accepted by /collection/view
MAX_COLLECTION_ITEMS = 5_000
