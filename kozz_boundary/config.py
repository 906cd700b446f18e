"""Boundary configuration management."""

import logging

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class BoundarySettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Hub connection
    url: str = Field(default="http://localhost:4521", description="Hub Socket.IO URL")
    socket_path: str = Field(default="/socket.io/", description="Socket.IO path on the hub")

    # Identity
    platform: str = Field(default="console", description="Chat platform this boundary serves")
    name: str = Field(default="kozz-boundary", description="Boundary name announced to the hub")
    signing_secret: Optional[str] = Field(default=None, description="HMAC secret for signed payloads")

    # Runtime
    debug: bool = Field(default=False, description="Debug logging")
    log_file: str = Field(default="~/kozz-boundary.log", description="Log file path")

    model_config = {"env_prefix": "KOZZ_", "env_file": ".env", "extra": "ignore"}


def load_settings(**overrides) -> BoundarySettings:
    """Load settings from environment."""
    settings = BoundarySettings(**overrides)

    logger = logging.getLogger("kozz_boundary.config")
    if not settings.signing_secret:
        logger.warning(
            "No signing secret configured (KOZZ_SIGNING_SECRET). "
            "The introduction payload will be sent unsigned."
        )

    return settings
