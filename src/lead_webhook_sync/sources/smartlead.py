#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Smartlead webhook source.

Smartlead email campaign events describe the lead with flat ``to_*`` and
``sl_*`` fields. Only the recipient's name and email are available; phone and
company are never sent.
"""

from typing import Any, Dict, Mapping, Optional

from lead_webhook_sync.sources.base import WebhookSource, first_non_empty, split_full_name

# Audit record key -> payload field
AUDIT_FIELDS = {
    "smartlead_campaign": "campaign_name",
    "smartlead_campaign_id": "campaign_id",
    "from_email": "from_email",
}


class SmartleadSource(WebhookSource):
    """Leads from Smartlead email campaigns."""

    name = "smartlead"
    path = "/webhook/smartlead"
    source_system_label = "Smartlead Email Campaign"
    audit_label = "Smartlead"
    # smartlead_lead_id has to be created in HubSpot before it can be written
    foreign_id_property = None

    email_paths = ("to_email", "sl_lead_email")

    def extract_contact_fields(self, payload: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        first_name, last_name = split_full_name(first_non_empty(payload, ["to_name"]))
        return {
            "first_name": first_name,
            "last_name": last_name,
            "phone": None,
            "company": None,
        }

    def extract_source_id(self, payload: Mapping[str, Any]) -> Optional[str]:
        return first_non_empty(payload, ["sl_email_lead_id"])

    def extract_event_type(self, payload: Mapping[str, Any]) -> Optional[str]:
        return first_non_empty(payload, ["event_type"])

    def extract_metadata(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        metadata = {}
        for audit_key, payload_key in AUDIT_FIELDS.items():
            value = first_non_empty(payload, [payload_key])
            if value:
                metadata[audit_key] = value
        return metadata
