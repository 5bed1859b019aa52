#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
SalesGodCRM webhook source.

SalesGodCRM posts contact events whose fields may sit at the top level, under
``contact`` or under ``data`` depending on the event type.
"""

from typing import Any, Dict, Mapping, Optional

from lead_webhook_sync.sources.base import (
    WebhookSource,
    first_non_empty,
    nested_paths,
    split_full_name,
)

CONTAINERS = ["contact", "data"]


class SalesGodCRMSource(WebhookSource):
    """Contacts pushed from SalesGodCRM."""

    name = "salesgodcrm"
    path = "/webhook/salesgodscrm"
    source_system_label = "SGCRM"
    audit_label = "SGCRM"
    foreign_id_property = "salesgodcrm_contact_id"

    email_paths = nested_paths("email", CONTAINERS)

    first_name_paths = nested_paths("firstName", CONTAINERS)
    last_name_paths = nested_paths("lastName", CONTAINERS)
    full_name_paths = nested_paths("fullName", CONTAINERS) + nested_paths("name", CONTAINERS)
    phone_paths = nested_paths("phoneNumber", CONTAINERS) + nested_paths("phone", CONTAINERS)
    company_paths = nested_paths("company", CONTAINERS)
    id_paths = nested_paths("id", CONTAINERS)

    def extract_contact_fields(self, payload: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        first_name = first_non_empty(payload, self.first_name_paths)
        last_name = first_non_empty(payload, self.last_name_paths)

        if not first_name and not last_name:
            first_name, last_name = split_full_name(
                first_non_empty(payload, self.full_name_paths)
            )

        return {
            "first_name": first_name,
            "last_name": last_name,
            "phone": first_non_empty(payload, self.phone_paths),
            "company": first_non_empty(payload, self.company_paths),
        }

    def extract_source_id(self, payload: Mapping[str, Any]) -> Optional[str]:
        return first_non_empty(payload, self.id_paths)

    def extract_event_type(self, payload: Mapping[str, Any]) -> Optional[str]:
        return first_non_empty(payload, ["event"])
