#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exceptions raised while syncing webhook contacts into HubSpot.

Each exception maps to the HTTP status returned to the webhook sender.
"""

from typing import Any, List, Optional


class WebhookSyncError(Exception):
    """Base class for all sync errors."""

    status_code = 500


class ConfigurationError(WebhookSyncError):
    """Raised at startup when required configuration is missing or invalid."""


class MissingIdentity(WebhookSyncError):
    """Raised when no email can be extracted from a webhook payload."""

    status_code = 400

    def __init__(self, source: str, available_fields: Optional[List[str]] = None):
        self.source = source
        self.available_fields = available_fields or []
        super().__init__(f"Missing email in {source} webhook payload")


class Unauthorized(WebhookSyncError):
    """Raised when a webhook signature does not verify."""

    status_code = 401


class RemoteApiError(WebhookSyncError):
    """
    Raised when a HubSpot API call fails.

    Covers transport errors, timeouts and 4xx/5xx responses alike. The sender
    is expected to retry with its own backoff.
    """

    status_code = 500

    def __init__(
        self,
        operation: str,
        cause: Any,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.operation = operation
        self.cause = cause
        self.status = status
        self.body = body
        detail = f"HubSpot {operation} failed"
        if status is not None:
            detail += f" with status {status}"
        super().__init__(f"{detail}: {body or cause}")
