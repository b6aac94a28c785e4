"""Generator configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "STARGEN_"}

    default_seed: int | None = None  # None draws a fresh seed per generator
    default_region_name: str = "Unknown Region"
    max_name_attempts: int = 100
    log_level: str = "WARNING"


settings = Settings()
