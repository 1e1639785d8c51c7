"""
Client configuration for the Mixpanel HTTP API.
"""

import os
import logging
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mixpanel.com"


class ClientConfig(BaseModel):
    """Immutable settings shared by every request a client makes."""

    model_config = ConfigDict(frozen=True)

    token: str
    base_url: str = DEFAULT_BASE_URL
    override_ip: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator('token')
    @classmethod
    def validate_token(cls, v):
        """Token is the only credential, so it must be present."""
        if not v:
            raise ValueError('token is required')
        return v

    @field_validator('base_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        if not v:
            raise ValueError('base_url cannot be empty')
        return v.rstrip('/')

    @field_validator('override_ip')
    @classmethod
    def empty_ip_is_unset(cls, v):
        return v or None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a config from environment variables.

        Reads MIXPANEL_TOKEN, MIXPANEL_API_URL, MIXPANEL_OVERRIDE_IP and
        MIXPANEL_TIMEOUT.
        """
        timeout = os.getenv("MIXPANEL_TIMEOUT")
        config = cls(
            token=os.getenv("MIXPANEL_TOKEN", ""),
            base_url=os.getenv("MIXPANEL_API_URL", DEFAULT_BASE_URL),
            override_ip=os.getenv("MIXPANEL_OVERRIDE_IP") or None,
            timeout=float(timeout) if timeout else None,
        )
        logger.debug(f"Loaded Mixpanel config from environment: base_url={config.base_url}")
        return config
