from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl, Field


class Settings(BaseSettings):
    upstream_base_url: AnyHttpUrl = "https://rickandmortyapi.com/api"
    upstream_timeout: float = Field(default=10.0, gt=0)  # seconds

    # 1 = follow "next" cursors one page at a time
    loader_concurrency: int = Field(default=1, ge=1)

    default_pairs_limit: int = Field(default=20, ge=1)

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RM_",
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
