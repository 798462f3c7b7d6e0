"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_env: str = "development"
    app_debug: bool = False
    log_level: str = "INFO"

    # Ethereum JSON-RPC, tried in order
    rpc_urls: List[str] = ["https://cloudflare-eth.com"]

    # Etherscan V2 multichain API; chain_id selects the network
    etherscan_api_url: str = "https://api.etherscan.io/v2/api"
    chain_id: int = 1
    etherscan_api_key: str | None = None

    # Fetching
    http_timeout_seconds: float = 10.0
    recent_tx_limit: int = 25

    # Analysis
    snippet_context_lines: int = 2

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    @field_validator("rpc_urls", mode="after")
    @classmethod
    def validate_rpc_urls(cls, v: List[str]) -> List[str]:
        """Ensure at least one RPC endpoint is configured."""
        urls = [url.strip() for url in v if url.strip()]
        if not urls:
            raise ValueError("rpc_urls must contain at least one JSON-RPC endpoint")
        return urls

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @field_validator("snippet_context_lines", "recent_tx_limit", mode="after")
    @classmethod
    def validate_non_negative(cls, v: int, info) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must not be negative")
        return v

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
