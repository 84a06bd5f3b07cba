from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class ScanSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MRZ_", extra="ignore")

    min_confidence: float = Field(default=0.4, ge=0.0, le=1.0)
    strict_charset: bool = True
    require_valid: bool = True

    webhook_url: str | None = None
    webhook_retries: int = Field(default=3, ge=1)
    webhook_backoff_seconds: float = Field(default=0.1, ge=0.0)
    webhook_timeout_seconds: float = Field(default=3.0, gt=0.0)

    session_idle_seconds: float = Field(default=600.0, gt=0.0)

    paddle_lang: str = "en"

    log_json: bool = True
    log_level: str = "INFO"


settings = ScanSettings()
