#!/usr/bin/env python3
"""
Webhook receiver API.

This module provides the FastAPI application that accepts contact webhooks,
one endpoint per registered source system, and hands each event to the
SyncOrchestrator.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from lead_webhook_sync import __version__
from lead_webhook_sync.api.signature import check_signature
from lead_webhook_sync.config import AppConfig
from lead_webhook_sync.exceptions import MissingIdentity, RemoteApiError, Unauthorized
from lead_webhook_sync.sources import SourceRegistry, WebhookSource, default_registry
from lead_webhook_sync.sync import SyncOrchestrator
from lead_webhook_sync.utils.logger import get_logger, log_sensitive

logger = get_logger("api")


#----------------
# Pydantic Models
#----------------

class HealthStatus(BaseModel):
    status: str
    timestamp: datetime
    hubspotConnected: bool


class ServiceIndex(BaseModel):
    service: str
    version: str
    endpoints: List[str]
    sources: List[Dict[str, Any]]


#-----------------
# Helper Functions
#-----------------

def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    """Build a JSON error body."""
    content: Dict[str, Any] = {"error": error}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def parse_payload(body: bytes) -> Optional[Dict[str, Any]]:
    """Parse a request body, returning None unless it is a JSON object."""
    try:
        payload = json.loads(body or b"null")
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def make_webhook_handler(
    source: WebhookSource,
    config: AppConfig,
    orchestrator: SyncOrchestrator,
) -> Callable[[Request], Awaitable[JSONResponse]]:
    """
    Build the POST handler for one source.

    The raw body is read once so the signature is checked over exactly the
    bytes the sender signed. The sync itself makes blocking HubSpot calls and
    runs in the threadpool.
    """

    async def handle_webhook(request: Request) -> JSONResponse:
        logger.info(f"Received {source.audit_label} webhook")

        body = await request.body()
        signature = request.headers.get(config.signature_header)

        if logger.isEnabledFor(logging.DEBUG):
            log_sensitive(
                logger,
                logging.DEBUG,
                f"Headers: {dict(request.headers)}",
                signature=signature,
            )

        try:
            check_signature(body, signature, config.webhook_secret)
        except Unauthorized as e:
            return error_response(status.HTTP_401_UNAUTHORIZED, str(e))

        payload = parse_payload(body)
        if payload is None:
            logger.error(f"Invalid JSON payload in {source.name} webhook")
            return error_response(status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")

        logger.debug(f"Payload keys: {list(payload.keys())}")

        try:
            result = await run_in_threadpool(orchestrator.sync, payload, source)

        except MissingIdentity as e:
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                "Missing email in webhook payload",
                payload=payload,
                availableFields=e.available_fields,
            )

        except RemoteApiError as e:
            # 500 tells the sender to retry with backoff
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Webhook processing failed",
                message=str(e),
            )

        except Exception as e:
            logger.error(f"Webhook processing error: {str(e)}", exc_info=True)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Webhook processing failed",
                message=str(e),
            )

        return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_response())

    handle_webhook.__name__ = f"{source.name}_webhook"
    return handle_webhook


#-------------
# App Factory
#-------------

def create_app(
    config: AppConfig,
    orchestrator: Optional[SyncOrchestrator] = None,
    registry: Optional[SourceRegistry] = None,
) -> FastAPI:
    """
    Create the webhook receiver application.

    Args:
        config: Application configuration
        orchestrator: Sync orchestrator (built from config if None)
        registry: Webhook sources to expose (built-in sources if None)

    Returns:
        FastAPI: Configured application
    """
    if orchestrator is None:
        orchestrator = SyncOrchestrator.from_config(config)
    if registry is None:
        registry = default_registry()

    app = FastAPI(
        title="Lead Webhook Sync",
        description="Receives lead platform webhooks and syncs contacts into HubSpot",
        version=__version__,
    )
    app.state.config = config
    app.state.orchestrator = orchestrator
    app.state.registry = registry

    for source in registry:
        app.add_api_route(
            source.path,
            make_webhook_handler(source, config, orchestrator),
            methods=["POST"],
            tags=["Webhooks"],
            summary=f"{source.audit_label} contact webhook",
        )

    @app.get("/health", response_model=HealthStatus)
    async def health_check():
        """Liveness check. Does not call HubSpot."""
        return HealthStatus(
            status="ok",
            timestamp=datetime.now(timezone.utc),
            hubspotConnected=bool(config.hubspot_access_token),
        )

    @app.get("/", response_model=ServiceIndex)
    async def root():
        return ServiceIndex(
            service="Lead Webhook Sync",
            version=__version__,
            endpoints=[source.path for source in registry] + ["/health"],
            sources=[source.describe() for source in registry],
        )

    if not config.signature_verification_enabled:
        logger.warning("WEBHOOK_SECRET not set, webhook signatures will not be verified")

    return app
