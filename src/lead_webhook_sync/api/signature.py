#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Webhook signature verification.

Senders sign the raw JSON body with HMAC-SHA256 under a shared secret and send
the hex digest in a request header.
"""

import hashlib
import hmac
from typing import Optional, Union

from lead_webhook_sync.exceptions import Unauthorized
from lead_webhook_sync.utils.logger import get_logger

logger = get_logger(__name__)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def compute_signature(secret: str, body: Union[str, bytes]) -> str:
    """
    Compute the hex HMAC-SHA256 signature of a body.

    Args:
        secret: Shared webhook secret
        body: Exact serialized request body

    Returns:
        str: Lowercase hex digest
    """
    return hmac.new(_to_bytes(secret), _to_bytes(body), hashlib.sha256).hexdigest()


def verify_signature(body: Union[str, bytes], signature: Optional[str], secret: str) -> bool:
    """
    Check a signature against the body.

    Args:
        body: Exact serialized request body
        signature: Hex digest sent by the webhook sender
        secret: Shared webhook secret

    Returns:
        bool: True if the signature matches
    """
    if not signature:
        logger.warning("No signature header found in webhook request")
        return False

    # Compared as bytes; compare_digest rejects non-ASCII str arguments
    expected = compute_signature(secret, body).encode("ascii")
    received = signature.strip().lower().encode("utf-8", "replace")
    return hmac.compare_digest(expected, received)


def check_signature(body: bytes, signature: Optional[str], secret: Optional[str]) -> None:
    """
    Gate a webhook request on its signature.

    With no secret configured the check is skipped (fail-open) and a warning
    is logged.

    Raises:
        Unauthorized: If a secret is configured and the signature does not match
    """
    if not secret:
        logger.warning("WEBHOOK_SECRET not set, skipping HMAC verification")
        return

    if not verify_signature(body, signature, secret):
        logger.error("HMAC verification failed")
        raise Unauthorized("Unauthorized: Invalid signature")
