"""Communication helpers — platform-specific rendering of inline commands."""

from .formatting import (
    REGISTRY_STYLES,
    plain_registry,
    telegram_html_registry,
    whatsapp_registry,
)

__all__ = [
    "REGISTRY_STYLES",
    "plain_registry",
    "telegram_html_registry",
    "whatsapp_registry",
]
