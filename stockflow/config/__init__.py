"""Configuration module."""

from stockflow.config.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    get_request_context,
)
from stockflow.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "bind_request_context",
    "get_request_context",
    "clear_request_context",
]
