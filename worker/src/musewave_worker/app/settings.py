from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendMode(str, Enum):
    AUTO = "auto"
    OFFLINE = "offline"
    REMOTE = "remote"
    FORWARD = "forward"


class Settings(BaseSettings):
    """Runtime configuration for the MuseWave worker process."""

    model_config = SettingsConfigDict(
        env_prefix="MUSEWAVE_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    backend: BackendMode = Field(
        default=BackendMode.AUTO,
        description="Generation strategy (auto, offline, remote, forward).",
    )
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MUSEWAVE_API_KEY", "GEMINI_API_KEY", "API_KEY", "api_key"),
        description="API key for the remote generative model.",
    )
    api_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("MUSEWAVE_API_BASE_URL", "API_BASE_URL", "api_base_url"),
        description="Base URL of another worker to forward suggestion calls to.",
    )
    model_id: str = Field(
        default="gemini-2.5-flash",
        max_length=128,
        description="Remote model identifier.",
    )
    temperature: float = Field(
        default=0.9,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for remote generations.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=600.0,
        description="Timeout applied to forwarded HTTP calls.",
    )
    fallback_to_offline: bool = Field(
        default=False,
        description="Answer from the offline generator when the remote path fails.",
    )

    @model_validator(mode="after")
    def _normalise_endpoints(self) -> "Settings":
        if self.api_key is not None and not self.api_key.strip():
            self.api_key = None
        if self.api_base_url is not None:
            stripped = self.api_base_url.strip().rstrip("/")
            self.api_base_url = stripped or None
        return self

    def resolved_backend(self) -> BackendMode:
        if self.backend != BackendMode.AUTO:
            return self.backend
        if self.api_base_url:
            return BackendMode.FORWARD
        if self.api_key:
            return BackendMode.REMOTE
        return BackendMode.OFFLINE


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
