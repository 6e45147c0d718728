"""Application Settings - Environment-based configuration.

Uses Pydantic Settings for validation and type coercion. Every value has a
default, so the relay starts without any environment configured.
"""

import ipaddress
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blendrelay.config.constants import RELAY


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    log_json: bool = Field(
        default=True, description="Emit JSON logs (console renderer if false)"
    )

    # Sender
    target_host: str = Field(
        default=RELAY.TARGET_HOST, description="IPv4 host blendshapes are sent to"
    )

    # Listener
    listener_host: str = Field(
        default=RELAY.LISTENER_HOST, description="IPv4 host the listener binds"
    )
    listener_port: int = Field(
        default=RELAY.LISTENER_PORT,
        ge=RELAY.MIN_PORT,
        le=RELAY.MAX_PORT,
        description="UDP port the listener binds (0 for ephemeral)",
    )
    recv_buffer_size: int = Field(
        default=RELAY.RECV_BUFFER_SIZE,
        ge=1,
        le=RELAY.MAX_PORT,
        description="Max bytes read per datagram; longer payloads are truncated",
    )
    event_name: str = Field(
        default=RELAY.UDP_MESSAGE_EVENT,
        min_length=1,
        description="Host event name for forwarded messages",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("target_host", "listener_host")
    @classmethod
    def validate_ipv4_host(cls, v: str) -> str:
        """Hosts must be IPv4 literals; no name resolution is performed."""
        try:
            ipaddress.IPv4Address(v)
        except ValueError as e:
            raise ValueError(f"{v!r} is not an IPv4 address") from e
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
