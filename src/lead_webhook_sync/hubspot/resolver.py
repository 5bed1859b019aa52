#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Remote Contact Resolver

Finds the HubSpot contact for an email, creating it when none exists. The
lookup and the create are separate calls, so two concurrent webhooks for a new
address can both create a contact; HubSpot's own email uniqueness decides the
outcome.
"""

from typing import Any, Dict

from lead_webhook_sync.hubspot.client import HubSpotContactsClient
from lead_webhook_sync.hubspot.reconciler import CONTACT_FIELD_MAPPINGS, SOURCE_SYSTEM_PROPERTY
from lead_webhook_sync.models import ContactIntent, RemoteContact
from lead_webhook_sync.sources import WebhookSource
from lead_webhook_sync.utils.logger import get_logger

logger = get_logger(__name__)


class ContactResolver:
    """Resolves a ContactIntent to a RemoteContact."""

    def __init__(self, hubspot_client: HubSpotContactsClient):
        self.hubspot_client = hubspot_client

    def build_create_properties(self, intent: ContactIntent, source: WebhookSource) -> Dict[str, Any]:
        """
        Properties for a brand-new contact.

        Provenance is set at creation so the contact is tagged even if the
        follow-up update fails.
        """
        properties = {
            "email": intent.email,
            SOURCE_SYSTEM_PROPERTY: source.source_system_label,
        }

        fields = intent.contact_fields()
        for intent_field, hubspot_field in CONTACT_FIELD_MAPPINGS.items():
            value = fields.get(intent_field)
            if value:
                properties[hubspot_field] = value

        return properties

    def resolve(self, intent: ContactIntent, source: WebhookSource) -> RemoteContact:
        """
        Find or create the HubSpot contact for an intent.

        Args:
            intent: Normalized contact
            source: Source the webhook arrived from

        Returns:
            RemoteContact: Existing or newly created contact

        Raises:
            RemoteApiError: If any HubSpot call fails
        """
        existing = self.hubspot_client.search_by_email(intent.email)
        if existing:
            return RemoteContact(
                contact_id=existing["id"],
                existed=True,
                properties=existing["properties"],
            )

        logger.info(f"Creating new HubSpot contact for {intent.email}")
        contact_id, properties = self.hubspot_client.create_contact(
            self.build_create_properties(intent, source)
        )

        return RemoteContact(contact_id=contact_id, existed=False, properties=properties)
