"""Configuration management for the Hue client."""

import ipaddress
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class HueConfig(BaseModel):
    """Configuration for talking to a Hue bridge."""

    bridge_ip: Optional[str] = Field(
        default=None, description="IP address of the Hue bridge, discovered if unset"
    )
    username: Optional[str] = Field(
        default=None,
        description="Hue bridge username, derived from the hostname if unset",
    )
    client_name: str = Field(
        default="hue-lights", min_length=1, description="Device type sent on pairing"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    timeout: float = Field(
        default=2.0, gt=0.0, le=60.0, description="HTTP request timeout in seconds"
    )
    discovery_timeout: float = Field(
        default=5.0, gt=0.0, le=60.0, description="SSDP listen window in seconds"
    )
    rate_limit: int = Field(
        default=25, ge=1, le=1000, description="Light writes allowed per window"
    )
    rate_window: float = Field(
        default=1.0, gt=0.0, le=60.0, description="Rate limit window in seconds"
    )
    rate_poll_interval: float = Field(
        default=0.1, gt=0.0, le=5.0, description="Sleep between admission checks"
    )

    @field_validator("bridge_ip")
    @classmethod
    def validate_ip(cls, v):
        """Validate IP address format."""
        if v is None:
            return v
        try:
            ipaddress.ip_address(v)
            return v
        except ValueError as e:
            raise ValueError(f"Invalid IP address: {v}") from e

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Validate username format."""
        if v is not None and len(v) < 10:
            raise ValueError("Username must be at least 10 characters long")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @classmethod
    def from_env(cls) -> "HueConfig":
        """Create configuration from environment variables."""
        return cls(
            bridge_ip=os.getenv("HUE_BRIDGE_IP") or None,
            username=os.getenv("HUE_USERNAME") or None,
            client_name=os.getenv("HUE_CLIENT_NAME", "hue-lights"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            timeout=float(os.getenv("HUE_TIMEOUT", "2.0")),
            discovery_timeout=float(os.getenv("HUE_DISCOVERY_TIMEOUT", "5.0")),
            rate_limit=int(os.getenv("HUE_RATE_LIMIT", "25")),
            rate_window=float(os.getenv("HUE_RATE_WINDOW", "1.0")),
            rate_poll_interval=float(os.getenv("HUE_RATE_POLL_INTERVAL", "0.1")),
        )


# Global configuration instance
config = HueConfig.from_env()

# Device search target and the friendly name prefix a bridge answers with
SSDP_SEARCH_TARGET = "urn:schemas-upnp-org:device:basic:1"
BRIDGE_NAME_PATTERN = r"^Philips hue"

# Raw hue range stepped through by the hue cycling preset
HUE_MAX = 65535
HUE_STEP = 5000
