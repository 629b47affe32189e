from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SEND_URL = "https://api.clockworksms.com/http/send.aspx"
CREDIT_URL = "https://api.clockworksms.com/http/balance"


class Settings(BaseSettings):
    service_name: str = "clockwork-sms"
    log_level: str = "INFO"

    api_key: str = ""
    send_url: str = SEND_URL
    credit_url: str = CREDIT_URL
    # None leaves timeouts to the HTTP session the caller supplies.
    request_timeout_seconds: Optional[float] = None

    receipt_host: str = "0.0.0.0"
    receipt_port: int = Field(9090, ge=0, le=65535)
    receipt_path: str = "/receipts"

    model_config = SettingsConfigDict(
        env_prefix="CLOCKWORK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).strip().upper() if v else "INFO"

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def parse_timeout(cls, v):
        """Treat an empty or non-positive timeout from the environment as "no timeout"."""
        if v is None or v == "":
            return None
        v = float(v)
        return v if v > 0 else None


@lru_cache
def get_settings() -> Settings:
    return Settings()
