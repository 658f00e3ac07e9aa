from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseModel):
    """
    Configuration injected by the hosting platform when it builds the server.

    Values set here take precedence over the environment.
    """

    hf_token: Optional[str] = Field(
        default=None,
        description="Hugging Face API Token (이미지 생성 기능에 필요)",
    )


class Settings(BaseSettings):
    """
    Process-wide configuration for the toolbox MCP server.

    Values are loaded from environment variables with the `TOOLBOX_` prefix.
    The Hugging Face token also falls back to the conventional `HF_TOKEN`.
    A `.env` file is read during development.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLBOX_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    hf_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("TOOLBOX_HF_TOKEN", "HF_TOKEN"),
    )
    log_level: str = "INFO"
    http_timeout: float = 30.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings from environment."""
    return Settings()


def resolve_hf_token(
    config: Optional[ServerConfig],
    settings: Settings,
) -> Optional[str]:
    if config is not None and config.hf_token:
        return config.hf_token
    return settings.hf_token or None
