"""Configuration for the chartd URL service.

Values are read from environment variables (and a local ``.env`` file when
present) through Pydantic's ``BaseSettings``. The URL builder itself never
reads settings; the HTTP layer passes them in explicitly.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    chartd_base_url: str = Field(
        default="https://chartd.co",
        validation_alias=AliasChoices("CHARTD_BASE_URL", "chartd_base_url"),
    )
    default_image_type: str = Field(
        default="svg",
        validation_alias=AliasChoices("CHARTD_IMAGE_TYPE", "default_image_type"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    @field_validator("default_image_type", mode="before")
    @classmethod
    def _normalize_image_type(cls, value: str) -> str:
        token = str(value or "").strip().lower()
        if token not in {"svg", "png"}:
            raise ValueError(f"unsupported image type '{value}'")
        return token

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value or "INFO").strip().upper()


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the settings; call ``cache_clear`` after changing the environment."""

    return Settings()


__all__ = ["Settings", "get_settings"]
