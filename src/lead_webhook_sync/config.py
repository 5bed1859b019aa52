#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for the lead webhook sync service.

This module loads configuration from environment variables (and a .env file)
and validates it. A single AppConfig is built at process start and passed to
the components that need it.
"""

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from lead_webhook_sync.exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
DEFAULT_SIGNATURE_HEADER = "X-Webhook-Signature"

# Log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _optional_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class AppConfig:
    """Application configuration."""

    # HubSpot
    hubspot_access_token: Optional[str] = field(
        default_factory=lambda: os.getenv("HUBSPOT_ACCESS_TOKEN") or os.getenv("HUBSPOT_API_KEY")
    )
    hubspot_request_timeout: float = field(
        default_factory=lambda: float(
            os.getenv("HUBSPOT_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        )
    )

    # Webhook signature verification (skipped when unset)
    webhook_secret: Optional[str] = field(
        default_factory=lambda: os.getenv("WEBHOOK_SECRET") or None
    )
    signature_header: str = field(
        default_factory=lambda: os.getenv("WEBHOOK_SIGNATURE_HEADER", DEFAULT_SIGNATURE_HEADER)
    )

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", str(DEFAULT_PORT))))

    # Logging
    log_level: int = field(
        default_factory=lambda: LOG_LEVELS.get(
            os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
        )
    )
    log_file_path: Optional[Path] = field(default_factory=lambda: _optional_path("LOG_FILE_PATH"))
    json_logs: bool = field(
        default_factory=lambda: os.getenv("JSON_LOGS", "false").lower() == "true"
    )

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid
        """
        errors = []

        if not self.hubspot_access_token:
            errors.append("HUBSPOT_ACCESS_TOKEN environment variable not set")

        if self.hubspot_request_timeout <= 0:
            errors.append("HUBSPOT_REQUEST_TIMEOUT must be positive")

        if not 0 < self.port < 65536:
            errors.append("PORT must be between 1 and 65535")

        if self.log_file_path and not self.log_file_path.parent.exists():
            errors.append(f"Log file path parent does not exist: {self.log_file_path.parent}")

        return errors

    def require_valid(self) -> "AppConfig":
        """
        Raise ConfigurationError if the configuration is not usable.

        Returns:
            AppConfig: self, for chaining
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))
        return self

    @property
    def signature_verification_enabled(self) -> bool:
        return bool(self.webhook_secret)
