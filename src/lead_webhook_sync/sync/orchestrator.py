#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Contact Sync Orchestrator

Runs one inbound webhook through normalize, resolve, reconcile and update,
and produces the audit record for it. Each call is independent; the
orchestrator keeps no state between events.
"""

import json
from typing import Any, Mapping, Optional

from lead_webhook_sync.config import AppConfig
from lead_webhook_sync.exceptions import MissingIdentity, RemoteApiError
from lead_webhook_sync.hubspot import ContactResolver, HubSpotContactsClient, PropertyReconciler
from lead_webhook_sync.models import AuditRecord, SyncResult
from lead_webhook_sync.sources import WebhookSource
from lead_webhook_sync.utils.logger import get_logger

# Configure logger
logger = get_logger(__name__)

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"


class SyncOrchestrator:
    """
    Syncs webhook contacts into HubSpot.

    Failures are not masked: if the property update fails after a contact was
    just created, the contact stays in HubSpot with only its creation
    properties and the error propagates so the sender retries.
    """

    def __init__(
        self,
        resolver: ContactResolver,
        reconciler: Optional[PropertyReconciler] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            resolver: Finds or creates HubSpot contacts
            reconciler: Computes property patches
        """
        self.resolver = resolver
        self.reconciler = reconciler or PropertyReconciler()

    @classmethod
    def from_config(cls, config: AppConfig) -> "SyncOrchestrator":
        """Build an orchestrator talking to HubSpot with the configured token."""
        client = HubSpotContactsClient(
            access_token=config.hubspot_access_token,
            timeout=config.hubspot_request_timeout,
        )
        return cls(ContactResolver(client))

    @property
    def hubspot_client(self) -> HubSpotContactsClient:
        return self.resolver.hubspot_client

    def sync(self, payload: Mapping[str, Any], source: WebhookSource) -> SyncResult:
        """
        Sync one webhook payload.

        Args:
            payload: Webhook JSON body
            source: Source the webhook arrived from

        Returns:
            SyncResult: Contact ID, action and audit record

        Raises:
            MissingIdentity: If the payload carries no email
            RemoteApiError: If any HubSpot call fails
        """
        try:
            intent = source.normalize(payload)
        except MissingIdentity as e:
            logger.error(
                f"Missing email in {source.name} webhook payload. "
                f"Available fields: {', '.join(e.available_fields)}"
            )
            raise

        logger.info(f"Processing {source.audit_label} {intent.event_type or 'contact'} for {intent.email}")

        try:
            remote = self.resolver.resolve(intent, source)
            patch = self.reconciler.reconcile(intent, remote, source)
            self.hubspot_client.update_contact(remote.contact_id, patch)
        except RemoteApiError as e:
            logger.error(
                f"Error syncing {intent.email} from {source.name} "
                f"during {e.operation}: {e.body or e.cause}"
            )
            raise

        action = ACTION_UPDATED if remote.existed else ACTION_CREATED
        audit_record = AuditRecord(
            hubspot_contact_id=remote.contact_id,
            email=intent.email,
            action=action,
            source_system=source.audit_label,
            properties_updated=list(patch),
            source_id=intent.source_system_id,
            event_type=intent.event_type,
            metadata=dict(intent.metadata),
        )

        logger.info(f"Sync successful: {json.dumps(audit_record.to_dict())}")

        return SyncResult(
            hubspot_contact_id=remote.contact_id,
            action=action,
            audit_record=audit_record,
        )
