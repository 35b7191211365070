from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Mistral narrative integration
    # -----------------------------
    # No key => static fallback narrative only
    MISTRAL_API_KEY: str | None = Field(default=None)
    MISTRAL_BASE_URL: str = Field(default="https://api.mistral.ai/v1")
    MISTRAL_MODEL: str = Field(default="mistral-large-latest")
    MISTRAL_TEMPERATURE: float = Field(default=0.3)
    MISTRAL_TIMEOUT_S: float = Field(default=15.0)
    MISTRAL_MAX_RETRIES: int = Field(default=1)

    model_config = SettingsConfigDict(
        env_prefix="DEALSCORE_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("MISTRAL_API_KEY", mode="before")
    @classmethod
    def _blank_key_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("MISTRAL_TEMPERATURE", mode="before")
    @classmethod
    def _temperature_range(cls, v: Any) -> Any:
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("MISTRAL_TEMPERATURE must be numeric") from err
        if not 0.0 <= f <= 2.0:
            raise ValueError("MISTRAL_TEMPERATURE must be within [0, 2]")
        return f

    @field_validator("MISTRAL_TIMEOUT_S", mode="before")
    @classmethod
    def _timeout_positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("MISTRAL_TIMEOUT_S must be > 0")
        return f

    @field_validator("MISTRAL_MAX_RETRIES", mode="before")
    @classmethod
    def _retries_non_negative(cls, v: Any) -> Any:
        n = int(float(v))
        if n < 0:
            raise ValueError("MISTRAL_MAX_RETRIES must be >= 0")
        return n


config = AppConfig()
