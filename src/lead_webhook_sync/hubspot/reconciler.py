#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Property Reconciler

Computes the property patch for a resolved contact. The merge only fills gaps:
a property HubSpot already holds a value for is never overwritten. The
source_system provenance property is always written.
"""

from lead_webhook_sync.models import ContactIntent, PropertyPatch, RemoteContact
from lead_webhook_sync.sources import WebhookSource

SOURCE_SYSTEM_PROPERTY = "source_system"

# ContactIntent attribute -> HubSpot contact property
CONTACT_FIELD_MAPPINGS = {
    "first_name": "firstname",
    "last_name": "lastname",
    "phone": "phone",
    "company": "company",
}


class PropertyReconciler:
    """Builds fill-gaps property patches."""

    def __init__(self, field_mappings=None):
        self.field_mappings = field_mappings or CONTACT_FIELD_MAPPINGS

    @staticmethod
    def is_gap(remote: RemoteContact, hubspot_field: str, value: str) -> bool:
        """
        Whether a property may be written.

        Empty properties are gaps. On a contact this sync just created, a
        value equal to the one it was created with is also a gap, so the first
        patch re-asserts every field the webhook carried.
        """
        if not remote.has_property(hubspot_field):
            return True
        return not remote.existed and remote.get_property(hubspot_field) == value.strip()

    def reconcile(
        self,
        intent: ContactIntent,
        remote: RemoteContact,
        source: WebhookSource,
    ) -> PropertyPatch:
        """
        Compute the properties to update on a contact.

        Args:
            intent: Normalized contact from the webhook
            remote: Contact as HubSpot holds it
            source: Source the webhook arrived from

        Returns:
            PropertyPatch: Never empty, always holds source_system
        """
        patch: PropertyPatch = {SOURCE_SYSTEM_PROPERTY: source.source_system_label}

        fields = intent.contact_fields()
        for intent_field, hubspot_field in self.field_mappings.items():
            value = fields.get(intent_field)
            if value and self.is_gap(remote, hubspot_field, value):
                patch[hubspot_field] = value

        # A missing custom property definition surfaces from the update call
        if intent.source_system_id and source.foreign_id_property:
            patch[source.foreign_id_property] = intent.source_system_id

        return patch
